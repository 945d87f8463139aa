#!/usr/bin/env python3
"""
APT Versions Agent Packages Collector

Package sources provide the raw "<name> <version>" listing of installed
packages. The collector reads one of them and hands the text to the parser.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from AptVersions.Errors import CollectionError
from AptVersions.Packages.Parser import PackageVersionMap, get_packages
from AptVersions.Packages.Step import Step
from AptVersions.Tools import can_run, get_file_handle, run_command

DPKG_QUERY_COMMAND = "dpkg-query -W -f='${Package} ${Version}\\n'"

DEFAULT_TIMEOUT = 60


class PackageSource(ABC):
    """Provides the raw package listing of a host."""

    @abstractmethod
    def read_listing(self, logger=None) -> str:
        """
        Return the raw listing text.

        Raises:
            CollectionError: The listing could not be obtained
        """

    def describe(self) -> str:
        """Human readable description of where the listing comes from."""
        return type(self).__name__


class CommandSource(PackageSource):
    """Listing produced by a shell command."""

    def __init__(self, command: str, timeout: Optional[float] = DEFAULT_TIMEOUT):
        self.command = command
        self.timeout = timeout

    def read_listing(self, logger=None) -> str:
        result = run_command(self.command, logger=logger, timeout=self.timeout)

        if not result.success:
            if logger and result.stderr:
                logger.error(f"stderr: {result.stderr.strip()}")
            raise CollectionError(
                f"error running {result.command}: exit status {result.status}",
                command=result.command,
                status=result.status,
                stderr=result.stderr,
            )

        if result.stderr and logger:
            logger.warning(
                f"error found running {result.command}, continuing as exited "
                f"successfully: {result.stderr.strip()}"
            )

        return result.stdout

    def describe(self) -> str:
        return f"command `{self.command}`"


class DpkgQuerySource(CommandSource):
    """Listing of installed packages from the dpkg database."""

    def __init__(self, timeout: Optional[float] = DEFAULT_TIMEOUT):
        super().__init__(DPKG_QUERY_COMMAND, timeout=timeout)

    @staticmethod
    def is_enabled() -> bool:
        return can_run('dpkg-query')


class StringSource(PackageSource):
    """Listing given as text, mostly for offline runs and tests."""

    def __init__(self, listing: str):
        self.listing = listing

    def read_listing(self, logger=None) -> str:
        return self.listing

    def describe(self) -> str:
        return "provided listing"


class FileSource(PackageSource):
    """Listing previously saved to a file."""

    def __init__(self, path: str):
        self.path = path

    def read_listing(self, logger=None) -> str:
        handle = get_file_handle(file=self.path, logger=logger, no_error_log=True)
        if not handle:
            raise CollectionError(
                f"can't read package listing file {self.path}", command=self.path,
            )
        with handle:
            return handle.read()

    def describe(self) -> str:
        return f"file {self.path}"


def get_installed_packages(source: PackageSource,
                           logger=None) -> Tuple[PackageVersionMap, List[Step]]:
    """
    Collect installed packages with normalized versions.

    Returns:
        Tuple of the package map and the steps describing collection and
        normalization

    Raises:
        CollectionError: The listing could not be obtained, no partial
            result is returned
    """
    if logger:
        logger.debug(f"Collecting installed packages from {source.describe()}")

    listing = source.read_listing(logger=logger)

    packages, steps = get_packages(listing, logger=logger)

    if logger:
        logger.debug_result(action="package versions collection", data=len(packages))
        logger.info(f"{len(packages)} installed package(s) collected")

    collect_step = Step(
        title="Collect installed packages",
        description=f"The list of installed packages and their versions is read from {source.describe()}.",
    )

    return packages, [collect_step] + steps


__all__ = [
    'PackageSource', 'CommandSource', 'DpkgQuerySource', 'StringSource', 'FileSource',
    'get_installed_packages', 'DPKG_QUERY_COMMAND', 'DEFAULT_TIMEOUT',
]
