"""
AptVersions::Logger::Backend - An abstract logger backend

Backends receive every message the Logger lets through, already filtered on
verbosity. They only decide how a level is rendered on their sink.
"""

from abc import ABC, abstractmethod

# Most to least severe
LEVELS = ('error', 'warning', 'info', 'debug', 'debug2')


class Backend(ABC):
    """Abstract base class for logger backends."""

    def add_message(self, level, message):
        """
        Add a log message with a specific level.

        An empty message is dropped and a missing level means info.

        Raises:
            ValueError: level is not one of LEVELS
        """
        if not message:
            return
        level = level or 'info'
        if level not in LEVELS:
            raise ValueError(f"unknown log level {level}")
        self._write(level, message)

    @staticmethod
    def severity(level):
        """
        Severity of a level on sinks knowing a single debug level.

        debug2 is the agent's trace level: it shares the debug severity
        while keeping its own label.
        """
        return 'debug' if level == 'debug2' else level

    @abstractmethod
    def _write(self, level, message):
        """Emit a validated, non-empty message."""
