"""
Configuration management package for waymark search.

This package discovers, loads, validates and writes the YAML configuration
that controls how waymark search results are displayed.
"""

from .parser import (
    ConfigParser,
    ConfigParseResult,
    ConfigScope,
    ConfigurationError,
    normalize_keys,
    render_config_yaml,
    load_config,
    validate_config_file,
    create_config_template
)

__all__ = [
    'ConfigParser',
    'ConfigParseResult',
    'ConfigScope',
    'ConfigurationError',
    'normalize_keys',
    'render_config_yaml',
    'load_config',
    'validate_config_file',
    'create_config_template'
]
