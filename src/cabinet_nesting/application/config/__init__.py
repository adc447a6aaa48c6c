"""Configuration schema and loading for nesting jobs.

Public API:
    - NestingConfiguration: Root configuration model
    - NestingOptionsSchema, BoardConfig, PanelConfig, EdgeTapeConfig
    - load_config / load_config_from_dict: Load and validate configurations
    - ConfigError: Exception for configuration errors
    - config_to_*: Convert configuration into domain objects

Example:
    >>> from pathlib import Path
    >>> from cabinet_nesting.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("kitchen.json"))
    ...     print(f"{len(config.panels)} panels on {len(config.boards)} boards")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from cabinet_nesting.application.config.adapter import (
    config_to_boards,
    config_to_edge_tapes,
    config_to_nesting_config,
    config_to_panels,
)
from cabinet_nesting.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from cabinet_nesting.application.config.schema import (
    SUPPORTED_VERSIONS,
    BoardConfig,
    EdgeTapeConfig,
    NestingConfiguration,
    NestingOptionsSchema,
    PanelConfig,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "BoardConfig",
    "ConfigError",
    "EdgeTapeConfig",
    "NestingConfiguration",
    "NestingOptionsSchema",
    "PanelConfig",
    "config_to_boards",
    "config_to_edge_tapes",
    "config_to_nesting_config",
    "config_to_panels",
    "load_config",
    "load_config_from_dict",
]
