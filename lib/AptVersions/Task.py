#!/usr/bin/env python3
"""
APT Versions Agent Task

A task runs one collection cycle and exposes the result as the named data
context handed to policy evaluation. Policy evaluation itself happens
outside of the agent.
"""

from typing import Any, Dict, List, Optional

from AptVersions.Config import Config
from AptVersions.Packages.Collector import (
    CommandSource, DpkgQuerySource, FileSource, PackageSource, get_installed_packages,
)
from AptVersions.Packages.Parser import PackageVersionMap
from AptVersions.Packages.Step import Step


class AptVersionTask:
    """Installed packages collection task."""

    def __init__(self, config: Optional[Config] = None, logger=None,
                 source: Optional[PackageSource] = None):
        self.config = config or Config()
        self.logger = logger
        self.source = source or self.get_source(self.config)
        self.packages: Optional[PackageVersionMap] = None
        self._steps: List[Step] = []

    @staticmethod
    def get_source(config: Config) -> PackageSource:
        """
        Select the package source from configuration.

        A listing file wins over a custom command, dpkg-query is the default.
        """
        if config['listing-file']:
            return FileSource(config['listing-file'])
        if config['command']:
            return CommandSource(config['command'], timeout=config['timeout'])
        return DpkgQuerySource(timeout=config['timeout'])

    def isEnabled(self) -> bool:
        if isinstance(self.source, DpkgQuerySource):
            enabled = self.source.is_enabled()
            if not enabled and self.logger:
                self.logger.debug("dpkg-query not found, not a Debian based system")
            return enabled
        return True

    def prepare(self) -> PackageVersionMap:
        """
        Run one collection cycle and keep its result.

        Raises:
            CollectionError: The collection failed, previous data is dropped
        """
        self.packages = None
        self._steps = []

        packages, steps = get_installed_packages(self.source, logger=self.logger)

        self.packages = packages
        self._steps = steps
        return packages

    def data_context(self) -> Dict[str, Dict[str, str]]:
        """
        Package versions under the configured data key.

        Raises:
            RuntimeError: prepare() did not run successfully
        """
        if self.packages is None:
            raise RuntimeError("no collected packages, prepare() must run first")
        return {self.config['data-key']: self.packages.as_dict()}

    def steps(self) -> List[Dict[str, Optional[str]]]:
        return [step.as_dict() for step in self._steps]

    def result(self, with_steps: bool = True) -> Dict[str, Any]:
        result: Dict[str, Any] = {'data': self.data_context()}
        if with_steps:
            result['steps'] = self.steps()
        return result


__all__ = ['AptVersionTask']
