"""
APT Versions Agent Packages

Installed packages collection and version normalization.
"""

from AptVersions.Packages.Version import PackageVersion, normalize_version
from AptVersions.Packages.Parser import PackageVersionMap, PackageRecord, get_packages, parse_line
from AptVersions.Packages.Step import Step
from AptVersions.Packages.Collector import (
    PackageSource, CommandSource, DpkgQuerySource, StringSource, FileSource,
    get_installed_packages,
)

__all__ = [
    'PackageVersion', 'normalize_version',
    'PackageVersionMap', 'PackageRecord', 'get_packages', 'parse_line',
    'Step',
    'PackageSource', 'CommandSource', 'DpkgQuerySource', 'StringSource', 'FileSource',
    'get_installed_packages',
]
