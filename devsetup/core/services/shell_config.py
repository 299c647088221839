"""
Environment configuration — shell rc blocks and the live PATH.

Two separate effects:

- ``ensure_config_block`` persists lines into a shell configuration
  file so *future* shells see them.  Guarded by a verbatim containment
  check, so a marker is appended at most once however often it runs.
- ``ensure_live_path`` / ``apply_homebrew_env`` mutate ``os.environ``
  so the *remaining steps of this run* (and their child processes)
  see the change.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

BLOCK_TAG = "added by devsetup"


def path_export_line(entry: str | Path) -> str:
    """POSIX line that appends ``entry`` to PATH."""
    return f'export PATH="$PATH:{entry}"'


def brew_shellenv_line(brew_bin: str | Path) -> str:
    """POSIX line that loads the Homebrew environment at login."""
    return f'eval "$({brew_bin} shellenv)"'


def file_contains(path: Path, marker: str) -> bool:
    """Whether ``path`` is readable and contains ``marker`` verbatim.

    Undecodable bytes never match; an unreadable file counts as not
    containing the marker.
    """
    try:
        return marker in path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.warning("Cannot read %s: %s", path, e)
        return False


def ensure_config_block(
    path: Path,
    marker: str,
    lines: list[str],
    header: str,
    *,
    dry_run: bool = False,
) -> bool:
    """Append a commented block to a shell config file unless already there.

    Args:
        path: Shell configuration file (created if missing).
        marker: Text whose presence means "already configured".
        lines: Lines to append after the header.
        header: Comment header, rendered as ``# <header> (added by devsetup)``.
        dry_run: Report what would happen without writing.

    Returns:
        True if the block was (or, in dry-run, would be) appended.
    """
    if file_contains(path, marker):
        logger.debug("%s already contains %r", path, marker)
        return False

    if dry_run:
        logger.info("Dry run: would append %d line(s) to %s", len(lines), path)
        return True

    path.parent.mkdir(parents=True, exist_ok=True)
    block = "\n" + f"# {header} ({BLOCK_TAG})\n" + "".join(f"{line}\n" for line in lines)
    with path.open("a", encoding="utf-8") as fh:
        fh.write(block)
    logger.info("Appended %s block to %s", header, path)
    return True


def path_contains(entry: str | Path, path_value: str | None = None) -> bool:
    """Whether ``entry`` is one of the components of PATH."""
    current = os.environ.get("PATH", "") if path_value is None else path_value
    return f":{entry}:" in f":{current}:"


def ensure_live_path(entry: str | Path) -> bool:
    """Append ``entry`` to the process PATH unless it is already on it.

    Returns:
        True if PATH was changed.
    """
    if path_contains(entry):
        return False
    current = os.environ.get("PATH", "")
    os.environ["PATH"] = f"{current}:{entry}" if current else str(entry)
    logger.debug("PATH += %s", entry)
    return True


def apply_homebrew_env(prefix: Path) -> None:
    """Load the Homebrew shell environment into this process.

    Mirrors what ``brew shellenv`` exports, without spawning a shell.
    """
    os.environ["HOMEBREW_PREFIX"] = str(prefix)
    os.environ["HOMEBREW_CELLAR"] = str(prefix / "Cellar")
    os.environ["HOMEBREW_REPOSITORY"] = str(prefix)

    parts = [p for p in os.environ.get("PATH", "").split(":") if p]
    brew_dirs = [str(prefix / "bin"), str(prefix / "sbin")]
    os.environ["PATH"] = ":".join(brew_dirs + [p for p in parts if p not in brew_dirs])
    logger.debug("Loaded Homebrew environment from %s", prefix)
