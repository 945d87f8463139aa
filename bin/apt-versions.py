#!/usr/bin/env python3
"""
apt-versions - Installed packages versions collector

Prints installed Debian packages with their major.minor.patch versions as
JSON. See apt-versions --help for options.
"""

import os
import sys

# Run from a source checkout without installation
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), '..', 'lib'))

from AptVersions.Cli import main


if __name__ == '__main__':
    sys.exit(main())
