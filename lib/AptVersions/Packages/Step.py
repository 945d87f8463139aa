"""
APT Versions Agent Packages Step

Diagnostic records describing how package data was collected and
normalized, reported alongside the package map for audit purposes.
"""

from typing import Dict, Optional


class Step:
    """One audit step: a title, a description and optional remarks."""

    __slots__ = ('title', 'description', 'remarks')

    def __init__(self, title: str, description: str, remarks: Optional[str] = None):
        self.title = title
        self.description = description
        self.remarks = remarks

    def as_dict(self) -> Dict[str, Optional[str]]:
        return {
            'title': self.title,
            'description': self.description,
            'remarks': self.remarks,
        }

    def __eq__(self, other):
        if not isinstance(other, Step):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self) -> str:
        return f"Step(title={self.title!r})"
