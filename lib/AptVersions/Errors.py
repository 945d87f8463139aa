"""
APT Versions Agent errors
"""

from typing import Optional


class AptVersionsError(Exception):
    """Base class for all agent errors."""


class ConfigError(AptVersionsError):
    """Invalid agent configuration."""


class CollectionError(AptVersionsError):
    """
    The package listing could not be collected.

    Attributes:
        command: The command or source description that failed
        status: Process exit status, None if the process never completed
        stderr: Diagnostic output captured from the failed command
    """

    def __init__(self, message: str, command: Optional[str] = None,
                 status: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.command = command
        self.status = status
        self.stderr = stderr or ""

    def __str__(self) -> str:
        message = super().__str__()
        if self.stderr:
            return f"{message}: {self.stderr.strip()}"
        return message
