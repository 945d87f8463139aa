"""
AptVersions::Logger::Syslog - A syslog backend for the logger
"""

import syslog

from AptVersions.Errors import ConfigError
from AptVersions.Logger.Backend import Backend
from AptVersions.Version import PROVIDER

PRIORITIES = {
    'error': syslog.LOG_ERR,
    'warning': syslog.LOG_WARNING,
    'info': syslog.LOG_INFO,
    'debug': syslog.LOG_DEBUG,
}

FACILITIES = ['LOG_USER', 'LOG_DAEMON'] + [f'LOG_LOCAL{n}' for n in range(8)]


class Syslog(Backend):
    """Logs through the local syslog daemon, tagged with the agent name."""

    def __init__(self, logfacility='LOG_USER', **params):
        name = (logfacility or 'LOG_USER').upper()
        if name not in FACILITIES:
            raise ConfigError(f"Logger: unknown syslog facility {logfacility}")
        self.facility = name
        syslog.openlog(PROVIDER.lower(), syslog.LOG_PID, getattr(syslog, name))

    def _write(self, level, message):
        syslog.syslog(PRIORITIES[self.severity(level)], f"[{level}] {message}")
