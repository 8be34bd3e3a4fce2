"""
Configuration — Centralized settings management

Config hierarchy (highest to lowest priority):
  1. Project config (.logwash/config.yaml)
  2. User config (~/.logwash/config.yaml)
  3. Environment variables
  4. Defaults

Example config.yaml:

    margin:
      width: 30
      unit_width: 7
    display:
      symbols: ascii
    wash:
      limit: 256
      remotes: [origin, upstream]
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any, List, Callable, Tuple

import yaml

from .core.errors import ConfigError, MarginConfigError
from .core.washer import RenderOptions
from .presentation.duration import DurationUnit, DEFAULT_DURATION_TABLE
from .presentation.margin import MarginSpec

logger = logging.getLogger(__name__)


def _parse_bool(value: str) -> bool:
    return value.lower() in ('true', '1', 'yes')


def _parse_optional_int(value: str) -> Optional[int]:
    if value.lower() in ('', 'none', 'null'):
        return None
    return int(value)


def _parse_list(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass
class MarginConfig:
    """Author/age margin beside washed lines."""
    enabled: bool = True
    width: int = 25
    unit_width: int = 1           # 1 = abbreviated ("3d"), longest label = spelled out
    show_author: bool = True
    glyph: str = " "
    duration_table: Optional[List[Dict[str, Any]]] = None  # None = built-in table

    def table(self) -> Tuple[DurationUnit, ...]:
        """
        Duration units, from config rows or the built-in table.

        Raises:
            MarginConfigError: If a row is missing a field or has a bad value
        """
        if not self.duration_table:
            return DEFAULT_DURATION_TABLE
        try:
            return tuple(
                DurationUnit(
                    abbreviation=str(row["abbreviation"]),
                    singular=str(row["singular"]),
                    plural=str(row.get("plural", f"{row['singular']}s")),
                    seconds=int(row["seconds"]),
                )
                for row in self.duration_table
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise MarginConfigError(f"Invalid duration_table row: {e}") from e

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        try:
            self.spec()
        except MarginConfigError as e:
            return str(e)
        return None

    def spec(self) -> MarginSpec:
        """
        Build the margin geometry.

        Raises:
            MarginConfigError: If the geometry is invalid
        """
        return MarginSpec(
            total_width=self.width,
            unit_width=self.unit_width,
            duration_table=self.table(),
            glyph=self.glyph,
            show_author=self.show_author,
        ).validate()


@dataclass
class DisplayConfig:
    """Display preferences."""
    symbols: str = "auto"  # "unicode" | "ascii" | "auto"
    format: str = "text"   # "text" | "json"
    refs_after_message: bool = False
    align_hash: bool = True
    reflog_column: int = 16

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        valid_symbols = ("unicode", "ascii", "auto")
        if self.symbols not in valid_symbols:
            return f"Unknown symbols setting '{self.symbols}'. Valid: {', '.join(valid_symbols)}"

        valid_formats = ("text", "json")
        if self.format not in valid_formats:
            return f"Unknown format '{self.format}'. Valid: {', '.join(valid_formats)}"

        if self.reflog_column < 1:
            return f"reflog_column must be positive, got {self.reflog_column}"
        return None


@dataclass
class WashConfig:
    """Defaults for wash passes."""
    abbrev_length: int = 7
    limit: Optional[int] = None
    extended_header: bool = False
    remotes: List[str] = field(default_factory=lambda: ["origin"])

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.abbrev_length < 4 or self.abbrev_length > 40:
            return f"abbrev_length must be between 4 and 40, got {self.abbrev_length}"
        if self.limit is not None and self.limit < 0:
            return f"limit must be zero or positive, got {self.limit}"
        return None


@dataclass
class Config:
    """Application configuration."""
    margin: MarginConfig = field(default_factory=MarginConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    wash: WashConfig = field(default_factory=WashConfig)

    def validate(self) -> Optional[str]:
        """First error across all sections, or None."""
        for section in (self.margin, self.display, self.wash):
            error = section.validate()
            if error:
                return error
        return None

    def margin_spec(self) -> MarginSpec:
        """Validated MarginSpec for the engine."""
        return self.margin.spec()

    def render_options(self, color: bool = False, **overrides) -> RenderOptions:
        """RenderOptions from display and wash settings, with per-call overrides."""
        values = dict(
            color=color,
            refs_after_message=self.display.refs_after_message,
            align_hash=self.display.align_hash,
            extended_header=self.wash.extended_header,
            show_margin=self.margin.enabled,
            reflog_column=self.display.reflog_column,
            remotes=tuple(self.wash.remotes),
        )
        values.update(overrides)
        return RenderOptions(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        margin = {
            "enabled": self.margin.enabled,
            "width": self.margin.width,
            "unit_width": self.margin.unit_width,
            "show_author": self.margin.show_author,
            "glyph": self.margin.glyph,
        }
        if self.margin.duration_table:
            margin["duration_table"] = self.margin.duration_table
        return {
            "margin": margin,
            "display": {
                "symbols": self.display.symbols,
                "format": self.display.format,
                "refs_after_message": self.display.refs_after_message,
                "align_hash": self.display.align_hash,
                "reflog_column": self.display.reflog_column,
            },
            "wash": {
                "abbrev_length": self.wash.abbrev_length,
                "limit": self.wash.limit,
                "extended_header": self.wash.extended_header,
                "remotes": list(self.wash.remotes),
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary."""
        margin_data = data.get("margin") or {}
        display_data = data.get("display") or {}
        wash_data = data.get("wash") or {}

        limit = wash_data.get("limit")
        return cls(
            margin=MarginConfig(
                enabled=bool(margin_data.get("enabled", True)),
                width=int(margin_data.get("width", 25)),
                unit_width=int(margin_data.get("unit_width", 1)),
                show_author=bool(margin_data.get("show_author", True)),
                glyph=str(margin_data.get("glyph", " ")),
                duration_table=margin_data.get("duration_table"),
            ),
            display=DisplayConfig(
                symbols=display_data.get("symbols", "auto"),
                format=display_data.get("format", "text"),
                refs_after_message=bool(display_data.get("refs_after_message", False)),
                align_hash=bool(display_data.get("align_hash", True)),
                reflog_column=int(display_data.get("reflog_column", 16)),
            ),
            wash=WashConfig(
                abbrev_length=int(wash_data.get("abbrev_length", 7)),
                limit=int(limit) if limit is not None else None,
                extended_header=bool(wash_data.get("extended_header", False)),
                remotes=list(wash_data.get("remotes") or ["origin"]),
            ),
        )


# Settable keys per section, with the parser for their string form
SETTINGS: Dict[str, Dict[str, Callable[[str], Any]]] = {
    "margin": {
        "enabled": _parse_bool,
        "width": int,
        "unit_width": int,
        "show_author": _parse_bool,
        "glyph": str,
    },
    "display": {
        "symbols": str,
        "format": str,
        "refs_after_message": _parse_bool,
        "align_hash": _parse_bool,
        "reflog_column": int,
    },
    "wash": {
        "abbrev_length": int,
        "limit": _parse_optional_int,
        "extended_header": _parse_bool,
        "remotes": _parse_list,
    },
}


class ConfigManager:
    """
    Manages configuration loading and persistence.

    Hierarchy:
      1. Project config (.logwash/config.yaml)
      2. User config (~/.logwash/config.yaml)
      3. Environment (LOGWASH_SYMBOLS, LOGWASH_MARGIN_WIDTH, LOGWASH_LIMIT, LOGWASH_ABBREV)
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".logwash"
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"
    PROJECT_CONFIG_DIR = ".logwash"
    PROJECT_CONFIG_FILE = "config.yaml"

    # Environment variable -> (section, setting)
    ENV_OVERRIDES = {
        "LOGWASH_SYMBOLS": ("display", "symbols"),
        "LOGWASH_MARGIN_WIDTH": ("margin", "width"),
        "LOGWASH_LIMIT": ("wash", "limit"),
        "LOGWASH_ABBREV": ("wash", "abbrev_length"),
    }

    def __init__(self, project_dir: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / self.PROJECT_CONFIG_DIR / self.PROJECT_CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self.USER_CONFIG_FILE

    def _read(self, path: Path) -> Dict[str, Any]:
        """Read one YAML layer. Malformed files are ignored with a warning."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Ignoring unreadable config %s: %s", path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config %s: top level is not a mapping", path)
            return {}
        return data

    def load(self) -> Config:
        """
        Load configuration from all sources.

        Raises:
            ConfigError: If a layer holds a value of the wrong type
        """
        if self._config is not None:
            return self._config

        # Start with defaults
        config_data: Dict[str, Any] = {}

        # Layer 1: Environment (lowest of the explicit sources)
        for env_key, (section, setting) in self.ENV_OVERRIDES.items():
            value = os.environ.get(env_key)
            if value:
                try:
                    config_data.setdefault(section, {})[setting] = SETTINGS[section][setting](value)
                except ValueError:
                    logger.warning("Ignoring %s=%r: not a valid %s.%s", env_key, value, section, setting)

        # Layer 2: User config
        if self.user_config_path.exists():
            config_data = self._merge(config_data, self._read(self.user_config_path))

        # Layer 3: Project config (highest priority)
        if self.project_config_path.exists():
            config_data = self._merge(config_data, self._read(self.project_config_path))

        try:
            self._config = Config.from_dict(config_data)
        except ConfigError:
            raise
        except (ValueError, TypeError, AttributeError) as e:
            raise ConfigError(f"Invalid configuration value: {e}") from e
        return self._config

    def save_project(self, config: Config):
        """Save configuration to project config file."""
        self._write(self.project_config_path, config)

    def save_user(self, config: Config):
        """Save configuration to user config file."""
        self._write(self.user_config_path, config)

    def _write(self, path: Path, config: Config):
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            yaml.safe_dump(config.to_dict(), f, default_flow_style=False)
        self._config = config

    def set(self, key: str, value: str, scope: str = "project") -> Optional[str]:
        """
        Set a configuration value.

        Args:
            key: Dot-separated key (e.g., "margin.width")
            value: Value to set
            scope: "project" or "user"

        Returns:
            Error message or None if successful
        """
        config = self.load()

        parts = key.split(".")
        if len(parts) != 2:
            return f"Invalid key format: {key}. Use 'section.setting' (e.g., 'margin.width')"

        section, setting = parts
        if section not in SETTINGS:
            return f"Unknown section: {section}. Valid: {', '.join(SETTINGS)}"
        if setting not in SETTINGS[section]:
            valid = ", ".join(SETTINGS[section])
            return f"Unknown {section} setting: {setting}. Valid: {valid}"

        try:
            parsed = SETTINGS[section][setting](value)
        except ValueError:
            return f"Invalid value for {key}: {value!r}"

        target = getattr(config, section)
        previous = getattr(target, setting)
        setattr(target, setting, parsed)
        error = target.validate()
        if error:
            setattr(target, setting, previous)
            return error

        if scope == "project":
            self.save_project(config)
        else:
            self.save_user(config)

        return None

    def get(self, key: str) -> Optional[str]:
        """Get a configuration value."""
        config = self.load()

        parts = key.split(".")
        if len(parts) != 2:
            return None

        section, setting = parts
        if setting not in SETTINGS.get(section, {}):
            return None

        value = getattr(getattr(config, section), setting)
        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, list):
            return ",".join(value)
        if value is None:
            return None
        return str(value)

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result

    def display(self) -> str:
        """Format config for display."""
        config = self.load()
        margin = config.margin
        table = "custom" if margin.duration_table else "built-in"
        limit = config.wash.limit if config.wash.limit is not None else "none"

        lines = [
            "Configuration:",
            "",
            "Margin:",
            f"  Enabled: {margin.enabled}",
            f"  Width: {margin.width}",
            f"  Unit width: {margin.unit_width}",
            f"  Show author: {margin.show_author}",
            f"  Glyph: {margin.glyph!r}",
            f"  Duration table: {table}",
            "",
            "Display:",
            f"  Symbols: {config.display.symbols}",
            f"  Format: {config.display.format}",
            f"  Refs after message: {config.display.refs_after_message}",
            f"  Align hash: {config.display.align_hash}",
            f"  Reflog column: {config.display.reflog_column}",
            "",
            "Wash:",
            f"  Abbrev length: {config.wash.abbrev_length}",
            f"  Limit: {limit}",
            f"  Extended header: {config.wash.extended_header}",
            f"  Remotes: {', '.join(config.wash.remotes)}",
            "",
            "Config files:",
            f"  User: {self.user_config_path}",
            f"  Project: {self.project_config_path}",
        ]

        return "\n".join(lines)


# Convenience function
def get_config(project_dir: Optional[Path] = None) -> Config:
    """Load configuration for a project."""
    return ConfigManager(project_dir).load()
