"""
APT Versions Agent Version Module

This module has the only purpose to simplify the way the agent is released. This
file could be automatically generated and overridden during packaging.

It permits to re-define agent VERSION and agent PROVIDER during packaging so
any distributor can identify clearly the origin of the agent.

Build comments can be put in COMMENTS. Each list element will be reported in
output while using --version option and seen in debug logs.
"""

VERSION = "0.2.0"
PROVIDER = "APT-Versions"
COMMENTS = []

__all__ = ['VERSION', 'PROVIDER', 'COMMENTS']
