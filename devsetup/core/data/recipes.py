"""
Tool recipe registry — what gets installed and how it is verified.

Pure data, no logic. Keys are tool IDs; order is not significant here
(the orchestrator owns step order).

Fields:
    label          Display name.
    cli            Executable used for the presence check.
    formula        Homebrew formula, for tools installed via ``brew install``.
    install        argv for tools installed some other way.
    always_latest  Reinstall on every run to track the latest release.
    verify         argv whose first stdout line is the version report.
"""

from __future__ import annotations

HOMEBREW_INSTALL_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
HOMEBREW_INSTALL_CMD = f'/bin/bash -c "$(curl -fsSL {HOMEBREW_INSTALL_URL})"'


TOOL_RECIPES: dict[str, dict] = {

    # ── Homebrew formulae ───────────────────────────────────────

    "go": {
        "label": "Go",
        "cli": "go",
        "formula": "go",
        "verify": ["go", "version"],
    },
    "git": {
        "label": "Git",
        "cli": "git",
        "formula": "git",
        "verify": ["git", "--version"],
    },
    "tmux": {
        "label": "tmux",
        "cli": "tmux",
        "formula": "tmux",
        "verify": ["tmux", "-V"],
    },
    "dolt": {
        "label": "Dolt",
        "cli": "dolt",
        "formula": "dolt",
        "verify": ["dolt", "version"],
    },
    "node": {
        "label": "Node.js/npm",
        "cli": "npm",
        "formula": "node",
        "verify": ["node", "--version"],
    },

    # ── go install (always latest) ──────────────────────────────

    "bd": {
        "label": "Beads (bd)",
        "cli": "bd",
        "install": ["go", "install", "github.com/steveyegge/beads/cmd/bd@latest"],
        "always_latest": True,
        "verify": ["bd", "version"],
    },
    "gt": {
        "label": "Gas Town (gt)",
        "cli": "gt",
        "install": ["go", "install", "github.com/steveyegge/gastown/cmd/gt@latest"],
        "always_latest": True,
        "verify": ["gt", "version"],
    },

    # ── npm global ──────────────────────────────────────────────

    "claude": {
        "label": "Claude Code",
        "cli": "claude",
        "install": ["npm", "install", "-g", "@anthropic-ai/claude-code"],
        "requires": ["node"],
        "verify": ["claude", "--version"],
    },
}


# Tools checked by the final verification pass, in report order.
VERIFY_ORDER: list[str] = ["go", "git", "dolt", "tmux", "bd", "gt", "claude"]
