"""Argument parsing functionality for create-package."""

import argparse

from constants import Constants

VERSION = "0.1.0"


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="create-package",
        description="Create a new npm package in an empty directory.",
        add_help=True,
    )

    parser.add_argument("DIRECTORY",
                        help="Target directory (default: current directory)",
                        nargs="?",
                        default=None)
    parser.add_argument("--version",
                        action="version",
                        version=f"%(prog)s {VERSION}")

    tooling = parser.add_argument_group("tooling")
    tooling.add_argument("--prettier",
                         dest="PRETTIER",
                         help="Use Prettier",
                         action="store_true")
    tooling.add_argument("--eslint",
                         dest="ESLINT",
                         help="Use @antfu/eslint-config",
                         action="store_true")
    tooling.add_argument("--typescript",
                         dest="TYPESCRIPT",
                         help="Use TypeScript",
                         action="store_true")
    tooling.add_argument("--dual",
                         dest="DUAL",
                         help="This is not an ESM-only package (requires --typescript)",
                         action="store_true")
    tooling.add_argument("--package-manager",
                         dest="PACKAGE_MANAGER",
                         help="Pin this package manager in packageManager",
                         action="store",
                         type=str.lower,
                         choices=Constants.SUPPORTED_PACKAGE_MANAGERS)

    meta = parser.add_argument_group("metadata")
    meta.add_argument("--scope",
                      dest="SCOPE",
                      help="npm scope, e.g. 'acme' for @acme/<name>",
                      action="store",
                      type=str)
    meta.add_argument("--name",
                      dest="NAME",
                      help="Unscoped package name (default: directory name)",
                      action="store",
                      type=str)
    meta.add_argument("--author",
                      dest="AUTHOR",
                      help="Author string (default: from config or git)",
                      action="store",
                      type=str)
    meta.add_argument("--license",
                      dest="LICENSE",
                      help=f"License identifier (default: {Constants.DEFAULT_LICENSE})",
                      action="store",
                      type=str)
    meta.add_argument("--description",
                      dest="DESCRIPTION",
                      help="Package description (default: directory name)",
                      action="store",
                      type=str)

    parser.add_argument("--offline",
                        dest="OFFLINE",
                        help="Skip registry lookups; leave versions as 'latest'",
                        action="store_true")
    parser.add_argument("--dry-run",
                        dest="DRY_RUN",
                        help="Print what would be written without touching the disk",
                        action="store_true")
    parser.add_argument("--error-on-warnings",
                        dest="ERROR_ON_WARNINGS",
                        help="Exit with a non-zero status code if some versions stay unresolved.",
                        action="store_true")
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level (overrides CREATE_PACKAGE_LOG_LEVEL; default WARNING)",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not print next-step guidance.",
                        action="store_true")

    return parser.parse_args(argv)
