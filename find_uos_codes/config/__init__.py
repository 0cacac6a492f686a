from .loader import ConfigError, DatabaseConfig, FinderConfig, OptionDefaults, load_config

__all__ = [
    "ConfigError",
    "DatabaseConfig",
    "FinderConfig",
    "OptionDefaults",
    "load_config",
]
