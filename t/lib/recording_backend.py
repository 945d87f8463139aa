#!/usr/bin/env python3
"""Recording logger backend - keeps messages for inspection in tests"""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'lib'))

from AptVersions.Logger import Logger
from AptVersions.Logger.Backend import Backend


class RecordingBackend(Backend):
    """Logger backend storing all messages"""

    def __init__(self):
        self.messages = []

    def _write(self, level, message):
        self.messages.append({'level': level, 'message': message})

    def levels(self, level):
        return [m['message'] for m in self.messages if m['level'] == level]


def recording_logger(debug=2):
    """Return a logger and the backend it records into"""
    backend = RecordingBackend()
    return Logger(debug=debug, backends=[backend]), backend
