"""Configuration management for packviz using Pydantic models."""

import json
import logging
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILE_NAME = ".packviz.json"


class Layout(str, Enum):
    """Graphviz layout engines."""
    DOT = "dot"
    NEATO = "neato"
    FDP = "fdp"
    SFDP = "sfdp"
    TWOPI = "twopi"
    CIRCO = "circo"
    OSAGE = "osage"
    PATCHWORK = "patchwork"


class OutputFormat(str, Enum):
    """Output format types."""
    DOT = "dot"
    MERMAID = "mermaid"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"

    def to_logging(self) -> int:
        """Map to the standard library logging level."""
        return {
            LogLevel.ERROR: logging.ERROR,
            LogLevel.WARN: logging.WARNING,
            LogLevel.INFO: logging.INFO,
            LogLevel.DEBUG: logging.DEBUG,
        }[self]


AttributeValue = bool | int | float | str | None


def _format_attribute(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class StyleSection(BaseModel):
    """Base for a free-form Graphviz attribute section.

    Known attributes are declared as fields; any other Graphviz attribute is
    accepted as an extra key and passed through untouched.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    def to_attributes(self) -> dict[str, str]:
        """Render the section as Graphviz attributes, skipping unset values."""
        return {
            key: _format_attribute(value)
            for key, value in self.model_dump().items()
            if value is not None
        }


class ApplicationStyle(StyleSection):
    """Style of the synthetic application node."""
    style: str | None = "filled"
    fillcolor: str | None = "#333333"
    fontcolor: str | None = "white"


class GraphStyle(StyleSection):
    """Graph-level attributes."""
    root: str | None = "."
    overlap: AttributeValue = False
    splines: AttributeValue = True


class ClusterStyle(StyleSection):
    """Attributes applied to every namespace cluster."""
    color: str | None = "blue"


class NodeStyle(StyleSection):
    """Node default attributes."""
    shape: str | None = "box"
    style: str | None = "rounded, filled"
    fontcolor: str | None = "white"
    fillcolor: str | None = "#EF673E"
    color: str | None = "#EF673E"
    fontname: str | None = "Lato"


class EdgeStyle(StyleSection):
    """Edge default attributes."""
    len: AttributeValue = "0.4"


SECTION_NAMES = ("application", "graph", "cluster", "node", "edge")


class StyleOptions(BaseModel):
    """Complete style configuration for a graph build.

    A bare ``StyleOptions()`` holds the defaults. Partial instances are used
    as overrides and combined with the defaults by :func:`merge_style_options`.
    """
    layout: Layout = Layout.DOT
    deprecated_references_color: str = Field(alias="deprecatedReferencesColor", default="red")
    package_todo_color: str = Field(alias="packageTodoColor", default="red")
    application: ApplicationStyle = Field(default_factory=ApplicationStyle)
    graph: GraphStyle = Field(default_factory=GraphStyle)
    cluster: ClusterStyle = Field(default_factory=ClusterStyle)
    node: NodeStyle = Field(default_factory=NodeStyle)
    edge: EdgeStyle = Field(default_factory=EdgeStyle)

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


DEFAULT_STYLE_OPTIONS = StyleOptions()


def merge_style_options(overrides: StyleOptions | Mapping[str, Any] | None = None) -> StyleOptions:
    """Deep-merge caller overrides over the default style options.

    Attribute sections merge key by key: override keys replace defaults,
    default-only keys are kept and override-only keys are added. Scalar
    options (layout and the two relationship colors) are replaced when
    supplied.

    Args:
        overrides: Partial options as a ``StyleOptions`` or a plain mapping

    Returns:
        StyleOptions: Fully specified, immutable options

    Raises:
        ValueError: If an override value has the wrong type
    """
    if overrides is None:
        return DEFAULT_STYLE_OPTIONS

    if not isinstance(overrides, StyleOptions):
        overrides = StyleOptions.model_validate(dict(overrides))

    supplied = overrides.model_dump(exclude_unset=True)
    merged = DEFAULT_STYLE_OPTIONS.model_dump()
    for key, value in supplied.items():
        if key in SECTION_NAMES:
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value

    return StyleOptions.model_validate(merged)


class OutputConfig(BaseModel):
    """Output configuration section."""
    format: OutputFormat = OutputFormat.DOT
    path: str | None = None

    model_config = ConfigDict(use_enum_values=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.INFO

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        if isinstance(v, str):
            return v.lower()
        return v


class PackvizConfig(BaseModel):
    """Complete packviz configuration model."""
    style: StyleOptions = Field(default_factory=StyleOptions)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")

    @property
    def style_options(self) -> StyleOptions:
        """Style section merged over the defaults."""
        return merge_style_options(self.style)


def load_config(config_path: str | Path | None = None) -> PackvizConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .packviz.json

    Returns:
        PackvizConfig: Loaded and validated configuration

    Raises:
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return PackvizConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}") from e
        except ValueError as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}") from e

    return create_default_config()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .packviz.json configuration file by searching up directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def create_default_config() -> PackvizConfig:
    """Create default configuration with sensible defaults."""
    return PackvizConfig()
