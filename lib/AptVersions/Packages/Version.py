#!/usr/bin/env python3
"""
APT Versions Agent Packages Version

Reduces Debian package versions to a canonical major.minor.patch form.

Debian versions are shaped like [epoch:]upstream[-revision], with upstream
often carrying distribution markers (1:2.38.1-5+deb12u3, 3.137ubuntu1,
20200505dfsg0-2ubuntu6). The reduction keeps the first three numeric
components of the upstream part and drops everything else, so the result
can be compared numerically against policy thresholds. This is lossy: it
does not follow dpkg ordering rules.
"""

import re
from functools import total_ordering
from typing import List, Tuple

CANONICAL_PATTERN = re.compile(r'^\d+\.\d+\.\d+$')

# First character of a revision or build suffix
SUFFIX_PATTERN = re.compile(r'[-+~]')

LEADING_DIGITS = re.compile(r'^[0-9]*')

SEGMENTS_COUNT = 3


def _segments(version: str) -> List[str]:
    # Epoch
    if ':' in version:
        version = version.split(':', 1)[1]

    # Revision, backport or build suffix
    match = SUFFIX_PATTERN.search(version)
    if match:
        version = version[:match.start()]

    segments = []
    for part in version.split('.'):
        digits = LEADING_DIGITS.match(part).group(0)
        digits = digits.lstrip('0') or '0'
        segments.append(digits)

    segments = segments[:SEGMENTS_COUNT]
    while len(segments) < SEGMENTS_COUNT:
        segments.append('0')

    return segments


def normalize_version(version: str) -> str:
    """
    Normalize a raw package version to major.minor.patch.

    The transform never fails: segments without leading digits, or
    missing segments, become 0.

    >>> normalize_version("1:2.38.1-5+deb12u3")
    '2.38.1'
    >>> normalize_version("25.22ubuntu1.44mystring1")
    '25.22.44'
    """
    return '.'.join(_segments(version or ''))


def is_canonical(version: str) -> bool:
    """Check version is already in major.minor.patch form."""
    return bool(version) and CANONICAL_PATTERN.match(version) is not None


@total_ordering
class PackageVersion:
    """
    Normalized package version.

    Immutable value object holding the three integer components. Instances
    compare and sort numerically, and render as the canonical string.
    Comparing with anything but a PackageVersion raises TypeError: raw
    strings go through from_string or parse first.
    """

    __slots__ = ('_parts',)

    def __init__(self, major: int = 0, minor: int = 0, patch: int = 0):
        parts = (int(major), int(minor), int(patch))
        if any(part < 0 for part in parts):
            raise ValueError(f"negative version component in {parts}")
        object.__setattr__(self, '_parts', parts)

    @classmethod
    def from_string(cls, version: str) -> 'PackageVersion':
        """Normalize any raw package version."""
        return cls(*(int(part) for part in _segments(version or '')))

    @classmethod
    def parse(cls, version: str) -> 'PackageVersion':
        """
        Read back a canonical major.minor.patch string.

        Raises:
            ValueError: version is not in canonical form
        """
        if not is_canonical(version):
            raise ValueError(f"not a canonical version: {version!r}")
        return cls(*(int(part) for part in version.split('.')))

    @property
    def major(self) -> int:
        return self._parts[0]

    @property
    def minor(self) -> int:
        return self._parts[1]

    @property
    def patch(self) -> int:
        return self._parts[2]

    @property
    def parts(self) -> Tuple[int, int, int]:
        return self._parts

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __str__(self) -> str:
        return '.'.join(str(part) for part in self._parts)

    def __repr__(self) -> str:
        return f"PackageVersion('{self}')"

    def __eq__(self, other):
        if isinstance(other, PackageVersion):
            return self._parts == other._parts
        return NotImplemented

    def __lt__(self, other):
        if not isinstance(other, PackageVersion):
            return NotImplemented
        return self._parts < other._parts

    def __hash__(self):
        return hash(self._parts)


__all__ = ['PackageVersion', 'normalize_version', 'is_canonical', 'CANONICAL_PATTERN']
