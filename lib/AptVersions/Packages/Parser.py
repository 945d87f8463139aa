#!/usr/bin/env python3
"""
APT Versions Agent Packages Parser

Turns a raw "<name> <version>" listing, one package per line, into a map
of package names to normalized versions.
"""

from typing import Dict, Iterator, List, Mapping, NamedTuple, Optional, Tuple

from AptVersions.Packages.Step import Step
from AptVersions.Packages.Version import PackageVersion
from AptVersions.Tools import get_all_lines


class PackageRecord(NamedTuple):
    name: str
    raw_version: str


class PackageVersionMap(Mapping[str, PackageVersion]):
    """
    Read-only mapping of package names to normalized versions.

    Built once per collection, it is handed to policy evaluation through
    as_dict().
    """

    def __init__(self, versions: Optional[Dict[str, PackageVersion]] = None):
        self._versions: Dict[str, PackageVersion] = dict(versions or {})

    def __getitem__(self, name: str) -> PackageVersion:
        return self._versions[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._versions)

    def __len__(self) -> int:
        return len(self._versions)

    def __repr__(self) -> str:
        return f"PackageVersionMap({self.as_dict()!r})"

    def as_dict(self) -> Dict[str, str]:
        """Package names mapped to canonical version strings."""
        return {name: str(version) for name, version in self._versions.items()}


def parse_line(line: str) -> Optional[PackageRecord]:
    """
    Split a listing line into a package record.

    Returns:
        The record, or None when the line is not exactly a name and a
        version separated by a single space
    """
    parts = line.rstrip('\r').split(' ')
    if len(parts) != 2 or not parts[0] or not parts[1]:
        return None
    return PackageRecord(name=parts[0], raw_version=parts[1])


def get_packages(output: str, logger=None) -> Tuple[PackageVersionMap, List[Step]]:
    """
    Parse a raw package listing.

    Malformed lines are skipped with a warning. When a package name shows up
    more than once, the last line wins.

    Returns:
        Tuple of the package map and the normalization step
    """
    versions: Dict[str, PackageVersion] = {}
    skipped = 0

    for number, line in enumerate(get_all_lines(string=output or '', logger=logger), 1):
        if not line:
            continue

        record = parse_line(line)
        if record is None:
            skipped += 1
            if logger:
                logger.warning(f"Skipping malformed package line {number}: '{line}'")
            continue

        version = PackageVersion.from_string(record.raw_version)
        if logger:
            if record.name in versions:
                logger.debug(
                    f"Duplicate package {record.name}, replacing {versions[record.name]} by {version}"
                )
            logger.debug2(f"{record.name}: {record.raw_version} => {version}")
        versions[record.name] = version

    remarks = f"Normalized {len(versions)} package(s) to major.minor.patch versions."
    if skipped:
        remarks += f" Skipped {skipped} malformed line(s)."

    step = Step(
        title="Normalize package versions",
        description=(
            "Package versions are reduced to major.minor.patch: the epoch and any "
            "revision or build suffix after '-', '+' or '~' are dropped, each "
            "component keeps its leading digits only, leading zeros are removed, "
            "and missing components are set to 0."
        ),
        remarks=remarks,
    )

    return PackageVersionMap(versions), [step]


__all__ = ['PackageRecord', 'PackageVersionMap', 'parse_line', 'get_packages']
