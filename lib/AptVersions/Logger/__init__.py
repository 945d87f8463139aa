"""
APT Versions Agent Logger

This module provides logging functionality for the agent.
Supports multiple backends and verbosity levels.

A Logger holds its own configuration: nothing is shared between
instances, so independent collections can log through different
loggers at the same time.
"""

import importlib
from typing import Optional, List, Callable, Dict, Any

from AptVersions.Errors import ConfigError
from AptVersions.Logger.Backend import Backend

# Log level constants
LOG_DEBUG2 = 5
LOG_DEBUG = 4
LOG_INFO = 3
LOG_WARNING = 2
LOG_ERROR = 1
LOG_NONE = 0

BACKENDS = ('Stderr', 'File', 'Syslog')


class Logger:
    """
    Main logger class for the agent.

    Supports multiple backends, verbosity levels, and event callbacks.
    """

    def __init__(self, **params: Any) -> None:
        """
        Initialize logger with configuration.

        Args:
            **params: Configuration parameters including:
                - config: Config object or dict, provides defaults for the others
                - debug: Debug level (0-2)
                - logger: Backend names, as list or comma separated string
                - backends: Already built backend instances, used as is
                - prefix: Message prefix string
        """
        cfg = params.pop("config", None)
        if cfg is None:
            config: Dict[str, Any] = {}
        elif hasattr(cfg, "logger"):
            config = dict(cfg.logger())
        else:
            config = dict(cfg)
        config.update(params)

        debug = _to_int(config.get("debug"))
        if debug >= 2:
            verbosity = LOG_DEBUG2
        elif debug == 1:
            verbosity = LOG_DEBUG
        else:
            verbosity = LOG_INFO

        self.verbosity: int = verbosity
        self.prefix: Optional[str] = config.get("prefix")
        self._event_cb: Optional[Callable] = None
        self.backends: List[Backend] = list(config.get("backends") or [])

        if not self.backends:
            names = config.get("logger") or ["Stderr"]
            if isinstance(names, str):
                names = [n for n in names.split(",") if n.strip()]
            self._load_backends(names, config)

    def _load_backends(self, names: List[str], config: Dict[str, Any]) -> None:
        options = {
            key.replace("-", "_"): value
            for key, value in config.items()
            if key in ("color", "logfile", "logfile-maxsize", "logfacility")
        }

        seen: Dict[str, bool] = {}
        for name in names:
            backend_name = name.strip().capitalize()
            if backend_name in seen:
                continue
            seen[backend_name] = True

            if backend_name not in BACKENDS:
                raise ConfigError(f"Logger: unknown backend {name.strip()}")

            module = importlib.import_module(f"AptVersions.Logger.{backend_name}")
            backend_class = getattr(module, backend_name)
            self.backends.append(backend_class(**options))
            self.debug2(f"Logger backend {backend_name} initialized")

    def _log(self, *, level: str = "info", message: str, skip_log: bool = False) -> None:
        """
        Internal logging method.

        Args:
            level: Log level (debug2, debug, info, warning, error)
            message: Message to log
            skip_log: Skip logging to backends (for event callbacks only)
        """
        if not message:
            return

        if self.prefix:
            message = f"{self.prefix}{message}"

        message = message.rstrip("\n")

        if callable(self._event_cb):
            self._event_cb(level=level, message=message)
            if skip_log:
                return

        for backend in self.backends:
            backend.add_message(level, message)

    def register_event_cb(self, callback: Callable[..., None]) -> None:
        """
        Register a callback for log events.

        The callback is called with level and message keyword arguments
        for every message, whatever the verbosity.
        """
        self._event_cb = callback

    def debug_level(self) -> int:
        """
        Get current debug level.

        Returns:
            Debug level (0, 1, or 2)
        """
        if callable(self._event_cb):
            return LOG_DEBUG2 - LOG_INFO
        return self.verbosity - LOG_INFO if self.verbosity > LOG_INFO else 0

    def debug2(self, message: str) -> None:
        if self.verbosity >= LOG_DEBUG2 or callable(self._event_cb):
            self._log(
                level="debug2",
                message=message,
                skip_log=self.verbosity < LOG_DEBUG2
            )

    def debug(self, message: str) -> None:
        if self.verbosity >= LOG_DEBUG or callable(self._event_cb):
            self._log(
                level="debug",
                message=message,
                skip_log=self.verbosity < LOG_DEBUG
            )

    def debug_result(self, **params: Any) -> None:
        """
        Log a debug result message.

        Args:
            **params: Parameters including:
                - status: Status string
                - data: Data object (determines success if status not provided)
                - action: Action description
        """
        if self.verbosity < LOG_DEBUG:
            return

        status = params.get("status")
        if not status:
            status = "success" if params.get("data") else "no result"

        action = params.get("action", "action")

        self._log(level="debug", message=f"- {action}: {status}")

    def info(self, message: str) -> None:
        if self.verbosity >= LOG_INFO:
            self._log(level="info", message=message)

    def warning(self, message: str) -> None:
        if self.verbosity >= LOG_WARNING:
            self._log(level="warning", message=message)

    def error(self, message: str) -> None:
        if self.verbosity >= LOG_ERROR:
            self._log(level="error", message=message)


def _to_int(value: Any) -> int:
    if value is None or value is False:
        return 0
    if value is True:
        return 1
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


__all__ = [
    'Logger', 'Backend', 'BACKENDS',
    'LOG_DEBUG2', 'LOG_DEBUG', 'LOG_INFO', 'LOG_WARNING', 'LOG_ERROR', 'LOG_NONE',
]
