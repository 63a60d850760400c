"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    USAGE_ERROR = 2
    EXIT_WARNINGS = 3


class PackageManagers(Enum):
    """Package managers that can be pinned through the packageManager field.

    Args:
        Enum (string): Package manager names as published on npm.
    """

    NPM = "npm"
    PNPM = "pnpm"
    YARN = "yarn"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    # Metadata sources, fixed on purpose (not user-configurable)
    REGISTRY_URL_NPM_META = "https://npm.antfu.dev/"
    REGISTRY_URL_NPM = "https://registry.npmjs.org/"
    REQUEST_TIMEOUT = 10  # Timeout in seconds for every registry request
    USER_AGENT = "create-package/0.1.0"

    SUPPORTED_PACKAGE_MANAGERS = [
        PackageManagers.NPM.value,
        PackageManagers.PNPM.value,
        PackageManagers.YARN.value,
    ]
    UNRESOLVED_VERSION = "latest"
    INITIAL_VERSION = "0.1.0"
    DEFAULT_LICENSE = "MIT"

    PACKAGE_JSON_FILE = "package.json"
    GITIGNORE_FILE = ".gitignore"
    GITIGNORE_ENTRIES = ["node_modules", "dist"]

    # User configuration
    ENV_CONFIG = "CREATE_PACKAGE_CONFIG"
    DEFAULT_CONFIG_PATHS = [
        "~/.config/create-package/config.yml",
        "~/.config/create-package/config.yaml",
        "~/.config/create-package/config.json",
    ]

    # Logging
    ENV_LOG_LEVEL = "CREATE_PACKAGE_LOG_LEVEL"
    ENV_LOG_FMT = "CREATE_PACKAGE_LOG_FMT"
    DEFAULT_LOG_LEVEL = "WARNING"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
