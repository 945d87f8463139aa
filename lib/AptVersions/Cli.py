#!/usr/bin/env python3
"""
apt-versions command line interface

Collects installed packages and prints their normalized versions as the
JSON data context expected by policy evaluation.
"""

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from AptVersions import VERSION_STRING, COMMENTS
from AptVersions.Config import Config
from AptVersions.Errors import CollectionError, ConfigError
from AptVersions.Logger import Logger
from AptVersions.Task import AptVersionTask

EXIT_COLLECTION_ERROR = 1
EXIT_CONFIG_ERROR = 2


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='apt-versions',
        description='Collect installed Debian packages with major.minor.patch versions',
    )

    # Collection options
    parser.add_argument('--command', dest='command', metavar='COMMAND',
                        help='shell command listing "<name> <version>" lines (dpkg-query)')
    parser.add_argument('--listing-file', dest='listing-file', metavar='FILE',
                        help='read "<name> <version>" lines from a file instead')
    parser.add_argument('--timeout', dest='timeout', metavar='TIME',
                        help='listing command timeout in seconds (60)')
    parser.add_argument('--data-key', dest='data-key', metavar='KEY',
                        help='name of the data context (apt_version)')
    parser.add_argument('--steps', action='store_true', dest='steps',
                        help='also output the collection steps')

    # Configuration options
    parser.add_argument('--conf-file', dest='conf-file', metavar='FILE',
                        help='configuration file')

    # Logging options
    parser.add_argument('--logger', dest='logger', metavar='BACKEND',
                        help='logger backend (stderr)')
    parser.add_argument('--logfile', dest='logfile', metavar='FILE',
                        help='log file')
    parser.add_argument('--logfile-maxsize', dest='logfile-maxsize', metavar='SIZE',
                        help='maximum size of the log file in MB (0)')
    parser.add_argument('--logfacility', dest='logfacility', metavar='FACILITY',
                        help='syslog facility (LOG_USER)')
    parser.add_argument('--color', action='store_true', default=None, dest='color',
                        help='use color in the console')
    parser.add_argument('--debug', action='count', dest='debug',
                        help='debug mode, repeat for more verbosity')

    parser.add_argument('--version', action='store_true', dest='version',
                        help='print the version and exit')
    return parser


def print_version() -> None:
    print(VERSION_STRING)
    for comment in COMMENTS:
        print(comment)


def run(options: Dict[str, Any], stdout=None) -> int:
    stdout = stdout or sys.stdout
    with_steps = options.pop('steps', False)

    try:
        config = Config(options=options)
        logger = Logger(config=config)
    except ConfigError as e:
        sys.stderr.write(f"{e}\n")
        return EXIT_CONFIG_ERROR

    logger.debug(VERSION_STRING)

    task = AptVersionTask(config=config, logger=logger)
    if not task.isEnabled():
        logger.error("No package source available on this host")
        return EXIT_COLLECTION_ERROR

    try:
        task.prepare()
    except CollectionError as e:
        logger.error(f"Failed to collect installed packages: {e}")
        return EXIT_COLLECTION_ERROR

    json.dump(task.result(with_steps=with_steps) if with_steps else task.data_context(),
              stdout, indent=2, sort_keys=True)
    stdout.write("\n")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    options = vars(parser.parse_args(argv))

    if options.pop('version'):
        print_version()
        return 0

    return run(options)


if __name__ == '__main__':
    sys.exit(main())
