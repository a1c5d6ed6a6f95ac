"""Configuration file management for blink-launcher."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from blink_launcher.models import AliasRule, CustomApp, ExclusionRules

CONFIG_DIR = Path.home() / ".config" / "blink"


@dataclass
class Shortcuts:
    """Key bindings used by the presentation layer ("modifier+key")."""

    preferences: str | None = "cmd+,"
    refresh: str | None = "cmd+r"
    mark_single_instance: str | None = "cmd+s"


@dataclass
class Config:
    """Configuration for the launcher."""

    # Apps in non-standard locations or scripts
    custom_apps: list[CustomApp] = field(default_factory=list)

    # Search shortcuts
    aliases: list[AliasRule] = field(default_factory=list)

    # Hidden apps
    exclude_apps: list[str] = field(default_factory=list)
    exclude_patterns: list[str] = field(default_factory=list)

    shortcuts: Shortcuts = field(default_factory=Shortcuts)

    # Launch behavior
    always_new_window: bool = False
    close_on_blur: bool = True
    quit_after_launch: bool = True

    def __post_init__(self) -> None:
        """Coerce raw YAML values into typed entries."""
        try:
            self.custom_apps = [_coerce(CustomApp, entry) for entry in self.custom_apps or []]
            self.aliases = [_coerce(AliasRule, entry) for entry in self.aliases or []]
        except ValidationError as e:
            raise ValueError(f"Invalid config entry: {e}") from e

        if self.shortcuts is None:
            self.shortcuts = Shortcuts()
        elif isinstance(self.shortcuts, dict):
            try:
                self.shortcuts = Shortcuts(**self.shortcuts)
            except TypeError as e:
                raise ValueError(f"Invalid shortcuts section: {e}") from e

        self.exclude_apps = [str(name) for name in self.exclude_apps or []]
        self.exclude_patterns = [str(pattern) for pattern in self.exclude_patterns or []]

    def exclusion_rules(self) -> ExclusionRules:
        """Exclusion rules for catalog building."""
        return ExclusionRules(names=set(self.exclude_apps), patterns=list(self.exclude_patterns))


def _coerce(model: Any, entry: Any) -> Any:
    if isinstance(entry, model):
        return entry
    return model.model_validate(entry)


def load_config(config_path: Path | str | None = None) -> Config:
    """
    Load configuration from file.

    Args:
        config_path: Path to config file. If None, checks default locations:
            1. ~/.config/blink/config.yaml
            2. ~/.config/blink/config.yml

    Returns:
        Config object with loaded settings (or defaults if no config found)

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ValueError: If the file cannot be parsed or holds invalid values
    """
    if config_path:
        config_file = Path(config_path).expanduser()
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
    else:
        default_paths = [
            CONFIG_DIR / "config.yaml",
            CONFIG_DIR / "config.yml",
        ]
        config_file = next((path for path in default_paths if path.exists()), None)
        if config_file is None:
            return Config()

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ValueError(f"Failed to load config from {config_file}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_file} must contain a mapping at the top level")

    try:
        return Config(**data)
    except TypeError as e:
        raise ValueError(f"Unknown option in {config_file}: {e}") from e


def save_example_config(output_path: Path | str) -> None:
    """
    Save an example configuration file with all options documented.

    Args:
        output_path: Where to save the example config
    """
    example = """# Blink configuration file
# Place at ~/.config/blink/config.yaml

# Apps in non-standard locations or scripts you want to launch
custom_apps: []
#  - name: My App
#    path: ~/Tools/My App.app

# Alternative search terms. The app name must match the name shown in results.
aliases: []
#  - app: Code
#    shortcuts: [vsc, vscode, editor]
#  - app: Google Chrome
#    shortcuts: [chrome, browser, gc]

# Apps to hide from search results
exclude_apps: []
#  - Migration Assistant
#  - Boot Camp Assistant

# Pattern-based exclusions (* matches any characters, case-insensitive)
exclude_patterns: []
#  - "*Helper*"
#  - "*Uninstaller*"

# Keyboard shortcuts, "modifier+key" (cmd, shift, alt, ctrl)
shortcuts:
  preferences: "cmd+,"
  refresh: "cmd+r"
  mark_single_instance: "cmd+s"

# Open a new window for every launch (single-instance apps still reuse theirs)
always_new_window: false

# Hide the launcher when it loses focus
close_on_blur: true

# Quit after launching an app
quit_after_launch: true
"""

    path = Path(output_path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(example, encoding="utf-8")
