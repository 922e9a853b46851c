"""Configuration schema and loading for cutting plans.

Public API:
    - CutPlanConfiguration: Root configuration model
    - StockConfigSchema, PieceConfig, OutputConfig: Section models
    - OutputFormat: Output format enum
    - load_config: Load configuration from a JSON file
    - load_config_from_dict: Load configuration from a dictionary
    - ConfigError: Exception for configuration errors
    - validate_config: Checks that need the whole configuration
    - config_to_input: Convert a configuration to a planning request

Example:
    >>> from pathlib import Path
    >>> from plankcut.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("shelves.json"))
    ...     print(f"Stock length: {config.stock.length}")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from plankcut.application.config.adapter import config_to_input
from plankcut.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from plankcut.application.config.schema import (
    SUPPORTED_VERSIONS,
    CutPlanConfiguration,
    OutputConfig,
    OutputFormat,
    PieceConfig,
    StockConfigSchema,
)
from plankcut.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "ConfigError",
    "CutPlanConfiguration",
    "OutputConfig",
    "OutputFormat",
    "PieceConfig",
    "StockConfigSchema",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "config_to_input",
    "load_config",
    "load_config_from_dict",
    "validate_config",
]
