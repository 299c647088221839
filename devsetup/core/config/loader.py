"""
Configuration loader — reads devsetup.yml into a SetupConfig.

The config file is optional: with no file every setting has a default
that matches a stock macOS workstation. It reads YAML, validates against
the Pydantic schema, and returns a typed object.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

CONFIG_FILE = "devsetup.yml"
ENV_CONFIG = "DEVSETUP_CONFIG"


class ConfigError(Exception):
    """Raised when the setup configuration is invalid or unreadable."""


def _default_shell() -> str:
    return os.environ.get("SHELL", "")


class SetupConfig(BaseModel):
    """Workstation settings used by every provisioning step."""

    home: Path = Field(default_factory=Path.home)
    shell: str = Field(default_factory=_default_shell)
    homebrew_prefix: Path = Path("/opt/homebrew")
    brew_packages: list[str] = Field(default_factory=lambda: ["go", "git", "tmux"])
    update_homebrew: bool = True
    workspace: Path | None = None

    @field_validator("home", "homebrew_prefix", "workspace", mode="before")
    @classmethod
    def _expand_user(cls, value):
        if isinstance(value, str):
            return Path(value).expanduser()
        return value

    @property
    def go_bin(self) -> Path:
        """Where ``go install`` drops binaries."""
        return self.home / "go" / "bin"

    @property
    def shell_rc(self) -> Path:
        """Interactive shell rc file: ~/.zshrc for zsh, ~/.bashrc otherwise."""
        if self.shell.endswith("/zsh"):
            return self.home / ".zshrc"
        return self.home / ".bashrc"

    @property
    def login_profile(self) -> Path:
        """Login profile that carries the Homebrew shellenv line."""
        return self.home / ".zprofile"

    @property
    def brew_bin(self) -> Path:
        return self.homebrew_prefix / "bin" / "brew"

    @property
    def workspace_dir(self) -> Path:
        return self.workspace or self.home / "gt"


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Locate devsetup.yml.

    Search order: ``$DEVSETUP_CONFIG``, ``<start_dir>/devsetup.yml``,
    ``~/.config/devsetup/devsetup.yml``.

    Returns:
        Path to the config file, or None if there is none.
    """
    env_path = os.environ.get(ENV_CONFIG)
    if env_path:
        return Path(env_path).expanduser()

    candidates = [
        (start_dir or Path.cwd()) / CONFIG_FILE,
        Path.home() / ".config" / "devsetup" / CONFIG_FILE,
    ]
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None) -> SetupConfig:
    """Load and validate the setup configuration.

    Args:
        path: Explicit path to devsetup.yml. If None, searches the
            default locations and falls back to built-in defaults.

    Returns:
        Validated SetupConfig.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return SetupConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading setup config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = SetupConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid setup configuration: {e}") from e

    logger.info("Loaded setup config from %s (home=%s)", path, config.home)
    return config
