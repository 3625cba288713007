"""Plugin configuration stored as JSON."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

DEFAULT_PERMISSION_LEVEL = 4
MIN_PERMISSION_LEVEL = 0
MAX_PERMISSION_LEVEL = 4


@dataclass
class Config:
    """Settings for the blacklist: file version, language and command permission."""

    version: int = 1
    language: str = "en_US"
    command_permission_level: int = DEFAULT_PERMISSION_LEVEL

    def validate(self) -> list[str]:
        """Correct invalid values and return the message keys worth reporting."""
        messages: list[str] = []
        level = self.command_permission_level
        if level < MIN_PERMISSION_LEVEL or level > MAX_PERMISSION_LEVEL:
            self.command_permission_level = DEFAULT_PERMISSION_LEVEL
            messages.append("permission.error.invalidLevel")
        if self.command_permission_level == 0:
            messages.append("permission.warning.dangerousLevel")
        return messages

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "language": self.language,
            "CommandPermissionLevel": self.command_permission_level,
        }


def save_config(config: Config, path) -> None:
    """Write the configuration to ``path`` as indented JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config.to_dict(), indent=4, ensure_ascii=False), encoding="utf-8")


def load_config(path) -> Config:
    """Read the configuration; a missing or broken file is replaced by defaults."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("configuration must be a JSON object")
        defaults = Config()
        config = Config(
            version=int(data.get("version", defaults.version)),
            language=str(data.get("language", defaults.language)),
            command_permission_level=int(
                data.get("CommandPermissionLevel", defaults.command_permission_level)
            ),
        )
    except (OSError, ValueError, TypeError):
        config = Config()
        save_config(config, path)
    return config