"""
Configuration discovery and loading for waymark search.

Display and listing settings live in a YAML file. When no path is given the
file is located the same way for every command: the WAYMARK_CONFIG_PATH
environment variable, then the nearest project ``.waymark/`` directory
walking up from the working directory, then the user directory
(``$XDG_CONFIG_HOME/waymark`` or ``~/.config/waymark``). Keys may be written
in snake_case or camelCase.
"""

import os
import re
import yaml
import logging
from enum import Enum
from pathlib import Path
from typing import Dict, Any, Iterable, Mapping, Optional, List, Tuple, Union
from dataclasses import dataclass, field

from ..models.config import WaymarkConfig, validate_config_dict


logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = 'WAYMARK_CONFIG_PATH'

PROJECT_CONFIG_NAMES = (
    '.waymark/config.yaml',
    '.waymark/config.yml',
    '.waymark.yaml',
    '.waymark.yml',
)
USER_CONFIG_NAMES = ('config.yaml', 'config.yml')

CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])([A-Z])')

CONFIG_HEADER = [
    "# Waymark Search Configuration",
    "# Controls how matching waymarks are laid out, wrapped and listed.",
    "# Keys may also be written in camelCase (noWrap, sortBy, ...).",
]


class ConfigScope(Enum):
    """Where to look for a configuration file when no path is given."""
    DEFAULT = "default"
    PROJECT = "project"
    USER = "user"


@dataclass
class ConfigParseResult:
    """
    Outcome of loading configuration.

    Attributes:
        config: The validated configuration
        warnings: Non-fatal problems with the settings
        config_path: File the settings were read from (None for built-in defaults)
        source: How the file was found: 'explicit', 'environment', 'project',
            'user' or 'defaults'
    """
    config: WaymarkConfig
    warnings: List[str] = field(default_factory=list)
    config_path: Optional[Path] = None
    source: str = 'defaults'

    @property
    def is_default(self) -> bool:
        """Whether no configuration file was used."""
        return self.config_path is None


class ConfigurationError(Exception):
    """Raised when a configuration file cannot be read, parsed or validated."""
    pass


def normalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Convert camelCase keys (e.g. ``keepCommentMarkers``) to snake_case, recursively."""
    normalized = {}
    for key, value in data.items():
        name = CAMEL_BOUNDARY.sub(r'_\1', str(key)).lower()
        normalized[name] = normalize_keys(value) if isinstance(value, dict) else value
    return normalized


def render_config_yaml(config: WaymarkConfig) -> str:
    """
    Render a configuration as commented YAML.

    Every key is preceded by its field description, so a saved file doubles
    as documentation of the available settings.

    Args:
        config: Configuration to render

    Returns:
        YAML text that loads back to an equal configuration
    """
    data = config.to_dict()
    lines = list(CONFIG_HEADER)

    for section_name in data:
        section = getattr(config, section_name)
        lines.append("")
        lines.append(f"{section_name}:")
        for key, info in type(section).model_fields.items():
            if info.description:
                lines.append(f"  # {info.description}")
            rendered = yaml.safe_dump({key: data[section_name][key]}, default_flow_style=False)
            lines.append(f"  {rendered.strip()}")

    return "\n".join(lines) + "\n"


class ConfigParser:
    """
    Locates, reads and validates waymark configuration files.

    Sections and keys missing from a file fall back to the WaymarkConfig
    defaults. In strict mode every validation warning is raised as a
    ConfigurationError instead of being returned.
    """

    def __init__(self, strict_mode: bool = False,
                 scope: Union[ConfigScope, str] = ConfigScope.DEFAULT,
                 cwd: Optional[Union[str, Path]] = None,
                 env: Optional[Mapping[str, str]] = None):
        """
        Initialize the configuration parser.

        Args:
            strict_mode: If True, treat warnings as errors
            scope: Which locations to search when no path is given
            cwd: Directory to resolve relative paths and start the project
                search from (current directory when None)
            env: Environment to read WAYMARK_CONFIG_PATH and XDG_CONFIG_HOME
                from (os.environ when None)
        """
        self.strict_mode = strict_mode
        self.scope = ConfigScope(scope) if isinstance(scope, str) else scope
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.env = os.environ if env is None else env
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> ConfigParseResult:
        """
        Load configuration from a file, or discover one.

        Args:
            config_path: Explicit configuration file; when None the environment,
                project and user locations are searched

        Returns:
            ConfigParseResult with the configuration and any warnings

        Raises:
            ConfigurationError: If an explicit file is missing, or the file
                found cannot be parsed or is invalid
        """
        if config_path is not None:
            path = self._resolve(config_path)
            if not path.is_file():
                raise ConfigurationError(f"Configuration file not found: {path}")
            return self._build_result(self._read_yaml(path), path, 'explicit')

        found = self.find_config()
        if found is None:
            self.logger.info("No configuration file found, using defaults")
            return self._build_result({}, None, 'defaults')

        path, source = found
        return self._build_result(self._read_yaml(path), path, source)

    def find_config(self) -> Optional[Tuple[Path, str]]:
        """
        Find the configuration file that applies to the working directory.

        Returns:
            Tuple of (path, source), or None when no file exists
        """
        env_path = self.env.get(CONFIG_PATH_ENV)
        if env_path:
            candidate = self._resolve(env_path)
            if candidate.is_file():
                return candidate, 'environment'
            self.logger.warning(f"{CONFIG_PATH_ENV} points to a missing file: {candidate}")

        if self.scope in (ConfigScope.DEFAULT, ConfigScope.PROJECT):
            path = self._first_existing(self.project_dirs(), PROJECT_CONFIG_NAMES)
            if path is not None:
                return path, 'project'

        if self.scope in (ConfigScope.DEFAULT, ConfigScope.USER):
            path = self._first_existing([self.user_config_dir()], USER_CONFIG_NAMES)
            if path is not None:
                return path, 'user'

        return None

    def project_dirs(self) -> List[Path]:
        """Get the working directory followed by each of its parents."""
        start = self.cwd.resolve()
        return [start, *start.parents]

    def user_config_dir(self) -> Path:
        """Get the per-user configuration directory."""
        base = self.env.get('XDG_CONFIG_HOME')
        root = Path(base).expanduser() if base else Path.home() / '.config'
        return root / 'waymark'

    def _first_existing(self, directories: Iterable[Path], names: Iterable[str]) -> Optional[Path]:
        for directory in directories:
            for name in names:
                candidate = directory / name
                if candidate.is_file():
                    self.logger.debug(f"Found configuration file: {candidate}")
                    return candidate
        return None

    def _resolve(self, path: Union[str, Path]) -> Path:
        path = Path(path).expanduser()
        return path if path.is_absolute() else self.cwd / path

    def _read_yaml(self, path: Path) -> Dict[str, Any]:
        """
        Read a YAML configuration file into a dictionary with snake_case keys.

        Raises:
            ConfigurationError: If the file cannot be read, is not valid YAML,
                or does not hold a mapping
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e

        if data is None:
            self.logger.warning(f"Configuration file is empty: {path}")
            return {}

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file {path} must contain a YAML mapping, got {type(data).__name__}"
            )

        return normalize_keys(data)

    def _build_result(self, data: Dict[str, Any], path: Optional[Path], source: str) -> ConfigParseResult:
        try:
            config = WaymarkConfig.from_dict(validate_config_dict(data))
        except ValueError as e:
            raise ConfigurationError(f"{path or 'Default configuration'}: {e}") from e

        warnings = config.validate_configuration()
        if path is not None and not data:
            warnings.append("Configuration file has no settings, using defaults")
        if config.display.compact and config.display.no_wrap:
            warnings.append("Compact output without wrapping may exceed the terminal width")

        if self.strict_mode and warnings:
            raise ConfigurationError(f"Configuration warnings in strict mode: {'; '.join(warnings)}")

        self.logger.info(f"Loaded {source} configuration from {path or 'built-in defaults'}")
        return ConfigParseResult(config=config, warnings=warnings, config_path=path, source=source)

    def save_config(self, config: WaymarkConfig, output_path: Union[str, Path]) -> Path:
        """
        Write a configuration as commented YAML, creating parent directories.

        Returns:
            The path written

        Raises:
            ConfigurationError: If the file cannot be written
        """
        path = self._resolve(output_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                f.write(render_config_yaml(config))
        except OSError as e:
            raise ConfigurationError(f"Cannot write configuration file {path}: {e}") from e

        self.logger.info(f"Configuration saved to {path}")
        return path

    def validate_config_file(self, config_path: Union[str, Path]) -> List[str]:
        """
        Check a configuration file without keeping the result.

        Returns:
            Error messages; empty when the file is valid
        """
        path = self._resolve(config_path)
        if not path.is_file():
            return [f"Configuration file not found: {path}"]

        try:
            validate_config_dict(self._read_yaml(path))
        except ConfigurationError as e:
            return [str(e)]
        except ValueError as e:
            return [f"{path}: {e}"]
        return []

    def get_config_template(self) -> str:
        """Get a commented YAML template holding every default setting."""
        return render_config_yaml(WaymarkConfig())


def load_config(config_path: Optional[Union[str, Path]] = None, strict_mode: bool = False,
                scope: Union[ConfigScope, str] = ConfigScope.DEFAULT) -> ConfigParseResult:
    """
    Convenience function to load configuration.

    Args:
        config_path: Path to configuration file (discovered when None)
        strict_mode: Whether to treat warnings as errors
        scope: Which locations to search when no path is given

    Returns:
        ConfigParseResult containing parsed configuration

    Raises:
        ConfigurationError: If configuration is invalid
    """
    return ConfigParser(strict_mode=strict_mode, scope=scope).load_config(config_path)


def validate_config_file(config_path: Union[str, Path]) -> List[str]:
    """Convenience function to validate a configuration file."""
    return ConfigParser().validate_config_file(config_path)


def create_config_template(output_path: Union[str, Path]) -> Path:
    """
    Write a template configuration file holding every default setting.

    Raises:
        ConfigurationError: If the template cannot be written
    """
    return ConfigParser().save_config(WaymarkConfig(), output_path)
