"""
sudoview Configuration Module
Handles loading and managing YAML configuration files.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from sudoview.classifier import Markers


@dataclass
class SourcesConfig:
    """Input files read once at startup."""
    log_path: Path = field(default_factory=lambda: Path("/var/log/auth.log"))
    group_path: Path = field(default_factory=lambda: Path("/etc/group"))


@dataclass
class MarkerConfig:
    """Tokens used to recognise and highlight privileged events."""
    escalation_marker: str = "sudo:"
    noise_marker: str = "pam_unix"  # PAM session open/close lines
    command_marker: str = "COMMAND="
    keyword: str = "sudo"
    privileged_group: str = "sudo"

    def to_markers(self) -> Markers:
        """Build the classifier marker set."""
        return Markers(
            escalation=self.escalation_marker,
            noise=self.noise_marker,
            command=self.command_marker,
        )


@dataclass
class DisplayConfig:
    """Configuration for the viewer panels."""
    recent_commands: int = 10
    top_commands: int = 0  # 0 = show all


@dataclass
class Config:
    """Main sudoview configuration."""
    sources: SourcesConfig = field(default_factory=SourcesConfig)
    markers: MarkerConfig = field(default_factory=MarkerConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    # Global settings
    log_file: Path | None = None
    log_level: str = "INFO"

    @classmethod
    def load(cls, config_path: Path | str) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML config file

        Returns:
            Config instance with loaded values
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return cls._from_dict(data)

    @classmethod
    def load_or_default(cls, config_path: Path | str | None = None) -> "Config":
        """
        Load configuration from file or return defaults.

        Args:
            config_path: Optional path to config file

        Returns:
            Config instance
        """
        if config_path is None:
            # Check default locations
            default_paths = [
                Path("config/config.yaml"),
                Path("config.yaml"),
                Path.home() / ".config" / "sudoview" / "config.yaml",
            ]
            for path in default_paths:
                if path.exists():
                    return cls.load(path)
            return cls()

        return cls.load(config_path)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        config = cls()

        if "sources" in data:
            sc = data["sources"] or {}
            config.sources = SourcesConfig(
                log_path=Path(sc.get("log_path", "/var/log/auth.log")),
                group_path=Path(sc.get("group_path", "/etc/group")),
            )

        if "markers" in data:
            mc = data["markers"] or {}
            config.markers = MarkerConfig(
                escalation_marker=mc.get("escalation_marker", "sudo:"),
                noise_marker=mc.get("noise_marker", "pam_unix"),
                command_marker=mc.get("command_marker", "COMMAND="),
                keyword=mc.get("keyword", "sudo"),
                privileged_group=mc.get("privileged_group", "sudo"),
            )

        if "display" in data:
            dc = data["display"] or {}
            config.display = DisplayConfig(
                recent_commands=dc.get("recent_commands", 10),
                top_commands=dc.get("top_commands", 0),
            )

        # Global settings
        log_file = data.get("log_file")
        config.log_file = Path(log_file) if log_file else None
        config.log_level = data.get("log_level", "INFO")

        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for serialization."""
        return {
            "log_file": str(self.log_file) if self.log_file else None,
            "log_level": self.log_level,
            "sources": {
                "log_path": str(self.sources.log_path),
                "group_path": str(self.sources.group_path),
            },
            "markers": {
                "escalation_marker": self.markers.escalation_marker,
                "noise_marker": self.markers.noise_marker,
                "command_marker": self.markers.command_marker,
                "keyword": self.markers.keyword,
                "privileged_group": self.markers.privileged_group,
            },
            "display": {
                "recent_commands": self.display.recent_commands,
                "top_commands": self.display.top_commands,
            },
        }

    def save(self, config_path: Path | str) -> None:
        """Save configuration to YAML file."""
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
