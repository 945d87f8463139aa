"""
APT Versions Agent

Collects installed Debian packages and reduces their versions to a
canonical major.minor.patch form for policy evaluation.
"""

from AptVersions.Version import VERSION, PROVIDER, COMMENTS

VERSION_STRING = f"{PROVIDER} Agent ({VERSION})"

__all__ = ['VERSION', 'PROVIDER', 'COMMENTS', 'VERSION_STRING']
