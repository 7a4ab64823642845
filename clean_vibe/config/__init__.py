"""Configuration Management Package"""

import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Environment variables that override file settings
ENV_OVERRIDES = {
    "VIBE_REMOTE": "remote",
    "VIBE_BRANCH": "branch",
    "VIBE_TAG_PREFIX": "tag_prefix",
}

# Settings an empty environment value may override
EMPTY_ALLOWED = {"tag_prefix"}


@dataclass
class Config:
    """Project release settings with sensible defaults."""
    manifest: str = "pyproject.toml"
    changelog: str = "CHANGELOG.md"
    history_file: str = ".version-history.json"
    tag_prefix: str = "v"
    remote: str = "origin"
    branch: str = "main"
    commit_link_base: str = "../../commit/"
    test_command: str = "pytest"
    format_command: str = ""        # empty: step skipped
    format_check_command: str = ""
    build_command: str = ""
    release_workflow: str = "release.yml"
    history_limit: int = 10
    recent_commits: int = 5  # Commits listed on the status dashboard

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        for name in ("manifest", "changelog", "history_file", "remote", "branch"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                warnings.append(f"Invalid {name} '{value}', using '{getattr(defaults, name)}'")
                setattr(self, name, getattr(defaults, name))

        for name in ("tag_prefix", "commit_link_base", "test_command", "format_command",
                     "format_check_command", "build_command", "release_workflow"):
            if not isinstance(getattr(self, name), str):
                warnings.append(f"Invalid {name} '{getattr(self, name)}', using '{getattr(defaults, name)}'")
                setattr(self, name, getattr(defaults, name))

        for name in ("history_limit", "recent_commits"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                warnings.append(f"Invalid {name} '{value}', using {getattr(defaults, name)}")
                setattr(self, name, getattr(defaults, name))

        return warnings

    def apply_env(self, environ=None) -> None:
        environ = os.environ if environ is None else environ
        for var, name in ENV_OVERRIDES.items():
            value = environ.get(var)
            if value is None:
                continue
            # An empty tag prefix means bare version tags
            if value or name in EMPTY_ALLOWED:
                setattr(self, name, value)

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        # Validate and print warnings to stderr
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


class ConfigManager:
    """Loads configuration from the project or home dotfile."""

    CONFIG_FILENAME = ".viberc"

    def __init__(self, root: Optional[Path] = None):
        self.root = Path(root) if root else None
        self._config: Optional[Config] = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        local_path = (self.root or Path.cwd()) / self.CONFIG_FILENAME
        home_path = Path.home() / self.CONFIG_FILENAME

        for path in (local_path, home_path):
            if path.exists():
                self._config = self._load_from_file(path)
                break
        else:
            self._config = Config()

        self._config.apply_env()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()
        if not isinstance(data, dict):
            print(f"Warning: Could not load {path}: expected a JSON object", file=sys.stderr)
            return Config()
        return Config.from_dict(data)


def load_config(root: Optional[Path] = None) -> Config:
    return ConfigManager(root).load()


__all__ = [
    "Config",
    "ConfigManager",
    "load_config",
    "ENV_OVERRIDES",
]
