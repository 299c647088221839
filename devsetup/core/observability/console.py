"""
Console — user-facing progress lines for a provisioning run.

Services report progress through a Console instead of printing
directly, so the CLI owns formatting and tests can capture output.
"""

from __future__ import annotations

import click


class Console:
    """Tagged, colored progress output on stdout."""

    _TAGS = {
        "info": ("[INFO] ", "green"),
        "warn": ("[WARN] ", "yellow"),
        "skip": ("[SKIP] ", "blue"),
        "error": ("[ERROR]", "red"),
    }

    def __init__(self, color: bool | None = None):
        self.color = color

    def _tagged(self, kind: str, message: str) -> None:
        tag, fg = self._TAGS[kind]
        click.echo(click.style(tag, fg=fg) + f" {message}", color=self.color)

    def info(self, message: str) -> None:
        self._tagged("info", message)

    def warn(self, message: str) -> None:
        self._tagged("warn", message)

    def skip(self, message: str) -> None:
        self._tagged("skip", message)

    def error(self, message: str) -> None:
        self._tagged("error", message)

    def check(self, label: str, ok: bool, detail: str) -> None:
        """One verification line: ✓ or ✗, label, detail."""
        mark = click.style("✓", fg="green") if ok else click.style("✗", fg="red")
        click.echo(f"  {mark} {label}: {detail}", color=self.color)

    def line(self, text: str = "") -> None:
        click.echo(text, color=self.color)
