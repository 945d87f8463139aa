#!/usr/bin/env python3
"""
APT Versions Agent Tools

OS-independent helpers used to run commands and read their output.
"""

import os
import re
import shutil
import subprocess
from io import StringIO
from typing import Dict, IO, List, Optional, Union

from AptVersions.Errors import CollectionError


class CommandResult:
    """Exit status and fully drained output of a finished command."""

    def __init__(self, command: str, status: int, stdout: str, stderr: str):
        self.command = command
        self.status = status
        self.stdout = stdout
        self.stderr = stderr

    @property
    def success(self) -> bool:
        return self.status == 0

    def __repr__(self) -> str:
        return f"CommandResult(command={self.command!r}, status={self.status})"


def trim_whitespace(value: str) -> Optional[str]:
    """
    Trim and normalize whitespace.

    Returns:
        Trimmed string with normalized whitespace
    """
    if value is None:
        return None

    return re.sub(r'\s+', ' ', value.strip())


def can_run(binary: str) -> bool:
    """Check if binary can be executed."""
    if os.path.isabs(binary):
        return os.access(binary, os.X_OK)
    return shutil.which(binary) is not None


def command_environment() -> Dict[str, str]:
    """Environment for commands whose output gets parsed."""
    env = os.environ.copy()
    env.update({'LC_ALL': 'C', 'LANG': 'C'})

    # Remove LD_LIBRARY_PATH for AppImage compatibility
    if (env.get('LD_LIBRARY_PATH') and
            env.get('APPRUN_STARTUP_APPIMAGE_UUID') and
            env.get('APPDIR')):
        env.pop('LD_LIBRARY_PATH', None)
        env.pop('LD_PRELOAD', None)

    return env


def loggable_command(command: Union[str, List[str]]) -> str:
    """Command as a string shortened to about 120 characters."""
    log_command = ' '.join(command) if isinstance(command, list) else command
    log_command = trim_whitespace(log_command) or ''
    if len(log_command) > 120:
        while len(log_command) > 116 and ' ' in log_command:
            log_command = log_command.rsplit(' ', 1)[0]
        log_command += " ..."
    return log_command


def run_command(command: Union[str, List[str]],
                logger=None,
                timeout: Optional[float] = None) -> CommandResult:
    """
    Run a command until completion and capture its output.

    A string command is run through the shell. Both output streams are read
    completely before returning.

    Raises:
        CollectionError: The command could not be started or timed out
    """
    log_command = loggable_command(command)
    if logger and logger.debug_level():
        logger.debug2(f"executing {log_command}")

    try:
        proc = subprocess.run(
            command,
            shell=isinstance(command, str),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            stdin=subprocess.DEVNULL,
            text=True,
            encoding='utf-8',
            errors='replace',
            env=command_environment(),
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        stderr = e.stderr or ''
        if isinstance(stderr, bytes):
            stderr = stderr.decode('utf-8', errors='replace')
        raise CollectionError(
            f"command {log_command} killed after {timeout}s timeout",
            command=log_command, stderr=stderr,
        ) from e
    except OSError as e:
        raise CollectionError(
            f"Can't run command {log_command}: {e}", command=log_command,
        ) from e

    return CommandResult(log_command, proc.returncode, proc.stdout or '', proc.stderr or '')


def get_file_handle(file: str = None,
                    string: str = None,
                    logger=None,
                    no_error_log: bool = False) -> Optional[IO]:
    """
    Get file handle for a file or a string.

    Returns:
        File handle or None when the file can't be opened
    """
    if file:
        try:
            return open(file, 'r', encoding='utf-8', errors='replace', newline='')
        except OSError as e:
            if logger and not no_error_log:
                logger.error(f"Can't open file {file}: {e}")
            return None

    elif string is not None:
        return StringIO(string)

    raise ValueError("Neither file nor string parameter given")


def get_all_lines(file: str = None,
                  string: str = None,
                  logger=None,
                  no_error_log: bool = False) -> Optional[List[str]]:
    """
    Get all lines from a file or a string.

    Lines end on line feeds only, other line break characters such as
    form feeds or carriage returns stay inside the line.
    """
    handle = get_file_handle(
        file=file, string=string, logger=logger, no_error_log=no_error_log
    )

    if not handle:
        return None

    with handle:
        content = handle.read()
    if not content:
        return []
    lines = content.split('\n')
    if lines[-1] == '':
        lines.pop()
    return lines
