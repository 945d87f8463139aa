"""
AptVersions::Logger::Stderr - A stderr backend for the logger

Supports coloring based on message level.
"""

import sys

from AptVersions.Logger.Backend import Backend


class Stderr(Backend):
    """Stderr-based logger backend with optional color support."""

    def __init__(self, color=False, stream=None, **params):
        """
        Initialize the stderr logger backend.

        Args:
            color (bool): Whether to use colored output
            stream: Writable stream, sys.stderr at write time by default
        """
        self._stream = stream

        self._formats = None
        if color:
            self._formats = {
                'warning': '\033[1;35m[{}] {}\033[0m\n',  # Magenta
                'error': '\033[1;31m[{}] {}\033[0m\n',    # Red
                'info': '\033[1;34m[{}]\033[0m {}\n',     # Blue
                'debug': '\033[1;1m[{}]\033[0m {}\n',     # Bold
                'debug2': '\033[1;36m[{}]\033[0m {}\n'    # Cyan
            }

    def _write(self, level, message):
        format_str = self._formats[level] if self._formats else '[{}] {}\n'

        stream = self._stream or sys.stderr
        stream.write(format_str.format(level, message))
        stream.flush()
