#!/usr/bin/env python3
"""
APT Versions Agent Config

Configuration is built from DEFAULT values, an optional configuration file
made of "key = value" lines, then user options overriding both.
"""

import glob
import os
import re
import warnings
from pathlib import Path
from typing import Any, Dict

from AptVersions.Errors import ConfigError

DEFAULT = {
    'color': None,
    'command': None,
    'data-key': 'apt_version',
    'debug': None,
    'listing-file': None,
    'logger': 'Stderr',
    'logfacility': 'LOG_USER',
    'logfile': None,
    'logfile-maxsize': None,
    'timeout': 60,
}

# Options which may hold a comma separated list of values
MULTI_OPTIONS = ['logger']

# Options which are paths resolved to absolute paths
PATH_OPTIONS = ['listing-file', 'logfile']


def empty(val: Any) -> bool:
    """
    Check if a value is considered empty.

    Returns:
        True if value is None, empty string, or empty collection
    """
    if val is None:
        return True
    if isinstance(val, str) and val.strip() == "":
        return True
    if isinstance(val, (list, dict)) and len(val) == 0:
        return True
    return False


class Config:
    """
    Configuration manager for the agent.

    Values are reachable as items, config['data-key'], or as attributes
    with underscores, config.data_key.
    """

    def __init__(self, **params: Any):
        """
        Initialize configuration.

        Args:
            **params: Configuration parameters including:
                - defaults: Default configuration dict
                - options: User options dict, 'conf-file' selects a file to load

        Raises:
            ConfigError: The configuration is invalid
        """
        defaults = params.get('defaults')
        if defaults is not None and not isinstance(defaults, dict):
            raise TypeError("config: default can only be a dict")

        self._options: Dict[str, Any] = {
            k: v for k, v in (params.get('options') or {}).items() if v is not None
        }
        self._default: Dict[str, Any] = dict(defaults or DEFAULT)
        self._values: Dict[str, Any] = {}
        self._loaded: Dict[str, bool] = {}

        self._loadDefaults()
        conf_file = self._options.get('conf-file')
        if conf_file:
            self.loadFromFile(conf_file)
        self._loadUserParams(self._options)
        self._checkContent()

    def __getitem__(self, name: str) -> Any:
        return self._values.get(name)

    def __getattr__(self, name: str) -> Any:
        if name.startswith('_'):
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'"
            )
        return self._values.get(name.replace('_', '-'))

    def _loadDefaults(self) -> None:
        self._values = dict(self._default)

    def loadFromFile(self, file: str) -> None:
        """
        Load configuration from file.

        Raises:
            ConfigError: If file doesn't exist or isn't readable
        """
        if not Path(file).is_file():
            raise ConfigError(f"Config: non-existing file {file}")

        if not os.access(file, os.R_OK):
            raise ConfigError(f"Config: non-readable file {file}")

        file = str(Path(file).resolve())
        if self._loaded.get(file):
            warnings.warn(f"Config: {file} configuration file still loaded")
            return
        self._loaded[file] = True

        try:
            with open(file, 'r', encoding='utf-8') as handle:
                lines = handle.read().splitlines()
        except OSError as e:
            raise ConfigError(f"Config: Failed to open {file}: {e}") from e

        for line in lines:
            # Match: key = value
            m = re.match(r'^\s*([\w-]+)\s*=\s*(.*)$', line)
            if m:
                key = m.group(1)
                val = self._value(m.group(2))

                if key in self._default:
                    self._values[key] = val
                elif key.lower() == 'include':
                    self._includeDirective(val, file)
                else:
                    warnings.warn(f"Config: unknown configuration directive {key}")
                continue

            # Match: include directive
            inc = re.match(r'^\s*include\s+(.+)$', line, re.I)
            if inc:
                self._includeDirective(self._value(inc.group(1)), file)

    @staticmethod
    def _value(val: str) -> str:
        val = val.rstrip()
        # Remove quotes if present
        n = re.match(r"^(['\"])(.*?)\1$", val)
        if n:
            return n.group(2)
        # Remove trailing comments
        return re.sub(r'\s*#.*$', '', val).rstrip()

    def _includeDirective(self, include: str, currentconfig: str) -> None:
        """
        Handle include directive in config file.

        Args:
            include: Path to include (file or directory)
            currentconfig: Path of current config file
        """
        include_path = Path(include)

        if not include_path.is_absolute():
            include_path = Path(currentconfig).parent / include

        include_path = include_path.resolve()
        if not include_path.exists():
            return

        if include_path.is_dir():
            # Include all .cfg files in directory
            for cfg in sorted(glob.glob(str(include_path) + "/*.cfg")):
                if Path(cfg).is_file() and os.access(cfg, os.R_OK):
                    self.loadFromFile(cfg)
        elif include_path.is_file() and os.access(include_path, os.R_OK):
            self.loadFromFile(str(include_path))

    def _loadUserParams(self, params: Dict[str, Any]) -> None:
        for key, value in params.items():
            self._values[key] = value

    def _checkContent(self) -> None:
        """
        Validate and normalize configuration content.

        Raises:
            ConfigError: If configuration is invalid
        """
        # Add File logger if logfile is set
        if self._values.get('logfile'):
            logger_val = self._values.get('logger') or ''
            if isinstance(logger_val, str) and not re.search(r'file', logger_val, re.I):
                self._values['logger'] = f"{logger_val},File" if logger_val else "File"

        logger_val = self._values.get('logger')
        if (isinstance(logger_val, str) and
                re.search(r'file', logger_val, re.I) and
                empty(self._values.get('logfile'))):
            raise ConfigError(
                "Config: usage of 'file' logger backend makes 'logfile' option mandatory"
            )

        for option in MULTI_OPTIONS:
            value = self._values.get(option)
            if isinstance(value, str):
                # Split on one or more commas
                self._values[option] = [
                    v.strip() for v in re.split(r',+', value) if v.strip()
                ]
            elif not isinstance(value, list):
                self._values[option] = []

        for option in PATH_OPTIONS:
            val = self._values.get(option)
            if not empty(val):
                self._values[option] = str(Path(val).resolve())

        timeout = self._values.get('timeout')
        if not empty(timeout):
            try:
                timeout = float(timeout)
            except (TypeError, ValueError):
                raise ConfigError(f"Config: invalid timeout value '{timeout}'")
            if timeout <= 0:
                raise ConfigError(f"Config: timeout must be positive, got {timeout}")
            self._values['timeout'] = timeout
        else:
            self._values['timeout'] = None

        if empty(self._values.get('data-key')):
            raise ConfigError("Config: 'data-key' option can't be empty")

    def logger(self) -> Dict[str, Any]:
        """
        Get logger configuration.

        Returns:
            Dictionary of logger configuration values
        """
        return {
            k: self._values.get(k)
            for k in ['debug', 'logger', 'logfacility', 'logfile',
                      'logfile-maxsize', 'color']
        }


__all__ = ['Config', 'DEFAULT', 'empty']
