"""
Configuration — Centralized settings management

Config hierarchy (highest to lowest priority):
  1. Environment variables
  2. Project config (.hookshift/config.yaml)
  3. User config (~/.hookshift/config.yaml)
  4. Defaults

Only presentation and matching knobs are configurable. The clustering
contract itself (score-keyed clusters, resolution rules, ranking order)
is fixed.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError


@dataclass
class GroupingConfig:
    """Statement matching preferences."""
    max_edit_distance: int = 1  # Stems within this many edits are a match
    stemming: bool = True

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if not isinstance(self.max_edit_distance, int) or self.max_edit_distance < 0:
            return f"Invalid max_edit_distance '{self.max_edit_distance}'. Must be an integer >= 0"
        return None


@dataclass
class LabelConfig:
    """Group label preferences."""
    min_token_count: int = 2  # A word must appear this often to make the label
    misc_label: str = "Misc"
    fallback_label: str = "Group #{index}"
    marker_prefix: str = "// "
    annotate_stats: bool = False  # Append score/dec/deps/usage to markers

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if not isinstance(self.min_token_count, int) or self.min_token_count < 1:
            return f"Invalid min_token_count '{self.min_token_count}'. Must be an integer >= 1"
        if "{index}" not in self.fallback_label:
            return f"fallback_label '{self.fallback_label}' must contain '{{index}}'"
        return None


@dataclass
class Config:
    """Application configuration."""
    grouping: GroupingConfig = field(default_factory=GroupingConfig)
    labels: LabelConfig = field(default_factory=LabelConfig)

    def validate(self) -> Optional[str]:
        """Validate all sections. Returns first error or None."""
        return self.grouping.validate() or self.labels.validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "grouping": {
                "max_edit_distance": self.grouping.max_edit_distance,
                "stemming": self.grouping.stemming,
            },
            "labels": {
                "min_token_count": self.labels.min_token_count,
                "misc_label": self.labels.misc_label,
                "fallback_label": self.labels.fallback_label,
                "marker_prefix": self.labels.marker_prefix,
                "annotate_stats": self.labels.annotate_stats,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary."""
        grouping_data = data.get("grouping", {}) or {}
        labels_data = data.get("labels", {}) or {}

        return cls(
            grouping=GroupingConfig(
                max_edit_distance=grouping_data.get("max_edit_distance", 1),
                stemming=grouping_data.get("stemming", True),
            ),
            labels=LabelConfig(
                min_token_count=labels_data.get("min_token_count", 2),
                misc_label=labels_data.get("misc_label", "Misc"),
                fallback_label=labels_data.get("fallback_label", "Group #{index}"),
                marker_prefix=labels_data.get("marker_prefix", "// "),
                annotate_stats=labels_data.get("annotate_stats", False),
            ),
        )


class ConfigManager:
    """
    Manages configuration loading and persistence.

    Hierarchy:
      1. Environment (HOOKSHIFT_*)
      2. Project config (.hookshift/config.yaml)
      3. User config (~/.hookshift/config.yaml)
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".hookshift"
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"
    PROJECT_CONFIG_DIR = ".hookshift"
    PROJECT_CONFIG_FILE = "config.yaml"

    def __init__(self, project_dir: Optional[Path] = None, config_path: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self.config_path = Path(config_path) if config_path else None
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        if self.config_path is not None:
            return self.config_path
        return self.project_dir / self.PROJECT_CONFIG_DIR / self.PROJECT_CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self.USER_CONFIG_FILE

    def load(self) -> Config:
        """Load configuration from all sources."""
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}

        # Layer 1: User config
        config_data = self._merge(config_data, self._read(self.user_config_path))

        # Layer 2: Project config (higher priority)
        config_data = self._merge(config_data, self._read(self.project_config_path))

        # Layer 3: Environment overrides
        if os.environ.get("HOOKSHIFT_MARKER_PREFIX") is not None:
            config_data.setdefault("labels", {})["marker_prefix"] = os.environ["HOOKSHIFT_MARKER_PREFIX"]
        if os.environ.get("HOOKSHIFT_ANNOTATE"):
            annotate = os.environ["HOOKSHIFT_ANNOTATE"].lower() in ("1", "true", "yes")
            config_data.setdefault("labels", {})["annotate_stats"] = annotate
        if os.environ.get("HOOKSHIFT_MAX_EDIT_DISTANCE"):
            try:
                distance = int(os.environ["HOOKSHIFT_MAX_EDIT_DISTANCE"])
            except ValueError:
                raise ConfigError(
                    f"HOOKSHIFT_MAX_EDIT_DISTANCE must be an integer, "
                    f"got '{os.environ['HOOKSHIFT_MAX_EDIT_DISTANCE']}'"
                )
            config_data.setdefault("grouping", {})["max_edit_distance"] = distance

        self._config = Config.from_dict(config_data)
        return self._config

    def load_valid(self) -> Config:
        """Load configuration, raising ConfigError if it does not validate."""
        config = self.load()
        error = config.validate()
        if error:
            raise ConfigError(error)
        return config

    def save_project(self, config: Config):
        """Save configuration to project config file."""
        self.project_config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.project_config_path, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False)

        self._config = config

    def _read(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError):
            return {}  # Ignore malformed config
        return data if isinstance(data, dict) else {}

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result


# Convenience function
def get_config(project_dir: Optional[Path] = None) -> Config:
    """Load configuration for a project."""
    return ConfigManager(project_dir).load()
