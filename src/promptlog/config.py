"""
Configuration for :class:`promptlog.logger.Logger`.

A :class:`LoggerConfig` can be built from a dictionary, from YAML text or
from the environment, and turns into the runtime theme, progress options
and key bindings a logger needs.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import yaml

from promptlog.errors import ConfigError
from promptlog.levels import Level
from promptlog.progress import DEFAULT_FRAMES, ProgressAnimation, ProgressOptions
from promptlog.tui.keybindings import DEFAULT_KEYBINDINGS, KeybindingsManager
from promptlog.tui.theme import LogTheme, theme_from_definitions

# Environment variable holding the level name, e.g. ``PROMPTLOG_LEVEL=verbose``.
LEVEL_ENV_VAR = "PROMPTLOG_LEVEL"


def _parse_level(value: Any) -> Level:
    try:
        return Level.parse(value)
    except (ValueError, AttributeError, TypeError):
        raise ConfigError(
            f"Unknown level {value!r}; expected one of "
            f"{', '.join(level.name.lower() for level in Level)}"
        ) from None


def _parse_keybindings(data: Any) -> dict[str, list[str]]:
    if not isinstance(data, Mapping):
        raise ConfigError(f"keybindings must be a mapping, got {type(data).__name__}")
    bindings: dict[str, list[str]] = {}
    for action, keys in data.items():
        if action not in DEFAULT_KEYBINDINGS:
            raise ConfigError(
                f"Unknown keybinding action {action!r}; expected one of "
                f"{', '.join(DEFAULT_KEYBINDINGS)}"
            )
        if isinstance(keys, str):
            keys = [keys]
        if not isinstance(keys, list) or not all(isinstance(k, str) and k for k in keys):
            raise ConfigError(f"Keys for {action!r} must be a list of key descriptors")
        bindings[action] = list(keys)
    return bindings


@dataclass
class LoggerConfig:
    """
    Logger settings.

    Example YAML:
        level: verbose
        theme:
          info: cyan
          warn: bold magenta
        progress_frames: ["-", "\\\\", "|", "/"]
        progress_interval: 0.08
        keybindings:
          cursor_up: [up, k, ctrl+p]
          cursor_down: [down, j, ctrl+n]
    """

    level: Level = Level.INFO
    theme: dict[str, str] = field(default_factory=dict)  # category -> rich style
    progress_frames: list[str] = field(default_factory=lambda: list(DEFAULT_FRAMES))
    progress_interval: float = 0.1  # Seconds between spinner frames
    keybindings: dict[str, list[str]] = field(default_factory=dict)  # action -> keys

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LoggerConfig:
        """Create config from a dictionary, validating every field."""
        theme = dict(data.get("theme") or {})
        # Fail early on bad categories or style definitions.
        theme_from_definitions(theme)

        frames = data.get("progress_frames")
        if frames is None:
            frames = list(DEFAULT_FRAMES)
        if not isinstance(frames, (list, tuple)) or not all(isinstance(f, str) for f in frames):
            raise ConfigError("progress_frames must be a list of strings")

        interval = data.get("progress_interval", 0.1)
        if isinstance(interval, bool) or not isinstance(interval, (int, float)) or interval <= 0:
            raise ConfigError(f"progress_interval must be a positive number, got {interval!r}")

        return cls(
            level=_parse_level(data.get("level", "info")),
            theme=theme,
            progress_frames=list(frames),
            progress_interval=float(interval),
            keybindings=_parse_keybindings(data.get("keybindings") or {}),
        )

    @classmethod
    def from_yaml_string(cls, content: str) -> LoggerConfig:
        """Load config from a YAML string."""
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> LoggerConfig:
        """Default config with the level taken from ``PROMPTLOG_LEVEL`` when set."""
        env = os.environ if environ is None else environ
        value = env.get(LEVEL_ENV_VAR, "").strip()
        if not value:
            return cls()
        return cls(level=_parse_level(value))

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary."""
        return {
            "level": self.level.name.lower(),
            "theme": dict(self.theme),
            "progress_frames": list(self.progress_frames),
            "progress_interval": self.progress_interval,
            "keybindings": {action: list(keys) for action, keys in self.keybindings.items()},
        }

    # ------------------------------------------------------------------
    # Runtime objects
    # ------------------------------------------------------------------

    def build_theme(self) -> LogTheme:
        return theme_from_definitions(self.theme)

    def build_progress_options(self) -> ProgressOptions:
        return ProgressOptions(
            animation=ProgressAnimation(
                frames=tuple(self.progress_frames),
                interval=self.progress_interval,
            )
        )

    def build_keybindings(self) -> KeybindingsManager:
        return KeybindingsManager(self.keybindings or None)
