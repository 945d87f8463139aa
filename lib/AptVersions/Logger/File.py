"""
AptVersions::Logger::File - A file backend for the logger

This is a file-based backend for the logger. It supports automatic filesize
limitation.
"""

import os
import sys
import time
from datetime import datetime

from AptVersions.Logger.Backend import Backend


class File(Backend):
    """File-based logger backend with automatic filesize limitation."""

    def __init__(self, logfile=None, logfile_maxsize=None, **params):
        """
        Initialize the file logger backend.

        Args:
            logfile (str): Path to the log file
            logfile_maxsize (int): Maximum log file size in MB (0 for unlimited)
        """
        self.logfile = logfile
        # Convert from MB to bytes
        self.logfile_maxsize = int(logfile_maxsize) * 1024 * 1024 if logfile_maxsize else 0

    def _write(self, level, message):
        """
        Append a message to the log file.

        The file is truncated first when it grew over the configured size.
        """
        if not self.logfile:
            return

        mode = 'a'
        if self.logfile_maxsize and os.path.exists(self.logfile):
            if os.path.getsize(self.logfile) > self.logfile_maxsize:
                mode = 'w'

        retry_until = time.time() + 60
        while time.time() < retry_until:
            try:
                handle = open(self.logfile, mode, encoding='utf-8')
            except OSError as e:
                sys.stderr.write(f"Warning: Can't open {self.logfile}: {e}\n")
                return

            with handle:
                if not self._lock(handle):
                    time.sleep(0.1)
                    continue
                timestamp = datetime.now().strftime('%a %b %d %H:%M:%S %Y')
                handle.write(f"[{timestamp}][{level}] {message}\n")
                return

        sys.stderr.write(f"Warning: Can't get an exclusive lock on {self.logfile}\n")

    @staticmethod
    def _lock(handle) -> bool:
        try:
            import fcntl
        except ImportError:
            # No advisory locking available on this platform
            return True
        try:
            fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        except OSError:
            return False
        return True
