"""create-package - scaffold a new npm package in an empty directory.

    Returns:
        int: Exit code
"""
import logging
import os
import sys

from args import parse_args
from cli_config import ConfigError, find_config_path, load_config
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes
from registry.npm import resolve_sync
from scaffold import PartialWriteError, ProjectOptions, ScaffoldError
from scaffold import guidance, manifest, templates, writer

logger = logging.getLogger(__name__)


def _setup_logging(args) -> None:
    """Configure logging based on CLI arguments."""
    # Honor CLI --loglevel by passing it to centralized logger via env
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging()

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        add_file_handler(log_file)
        logger.info("Logging to file: %s", log_file)


def _fail(message: str, code: ExitCodes) -> int:
    logger.error(message)
    sys.stderr.write(f"Error: {message}\n")
    return code.value


def resolve_versions(options: ProjectOptions, pkg: dict) -> list:
    """Resolve the manifest's dev-dependencies in place.

    Returns:
        list: Names that kept the unresolved placeholder.
    """
    names = manifest.resolution_names(options)
    if options.offline or not names:
        resolved = {}
    else:
        logger.info("Resolving latest versions of %s", ", ".join(sorted(names)))
        resolved = resolve_sync(names)
    unresolved = manifest.merge_versions(pkg, resolved, options.package_manager)
    if unresolved and not options.offline:
        logger.warning(
            "Unresolved versions: %s",
            ", ".join(unresolved),
            extra=extra_context(event="decision", component="cli", outcome="unresolved", count=len(unresolved)),
        )
    return unresolved


def run(args) -> int:
    """Scaffold a package for parsed ``args`` and return the exit code."""
    try:
        config = load_config(find_config_path(getattr(args, "CONFIG", None)))
    except ConfigError as exc:
        return _fail(str(exc), ExitCodes.USAGE_ERROR)

    options = ProjectOptions.from_args(args, config)
    try:
        options.validate()
    except ScaffoldError as exc:
        return _fail(str(exc), ExitCodes.USAGE_ERROR)

    try:
        writer.ensure_empty_directory(options.directory, create=not options.dry_run)
    except (ScaffoldError, OSError) as exc:
        return _fail(str(exc), ExitCodes.FILE_ERROR)

    pkg = manifest.build_manifest(options)
    unresolved = resolve_versions(options, pkg)
    manifest_text = manifest.dumps(pkg)
    files = templates.render_files(options, manifest_text)

    if options.dry_run:
        print("Would write:")
        for path in writer.planned_paths(files):
            print(f"  {os.path.join(options.directory, path)}")
        print()
        print(manifest_text, end="")
        return ExitCodes.SUCCESS.value

    try:
        written = writer.write_files(options.directory, files)
    except PartialWriteError as exc:
        done = ", ".join(exc.written) if exc.written else "none"
        return _fail(
            f"Failed to write files: {exc}. Already written to {options.directory}: {done}",
            ExitCodes.FILE_ERROR,
        )
    logger.info("Wrote %d files to %s", len(written), options.directory)

    if not getattr(args, "QUIET", False):
        steps = guidance.next_steps(options.directory, pkg, options.package_manager)
        print(guidance.format_guidance(options.name, steps, [] if options.offline else unresolved))

    if unresolved and not options.offline and getattr(args, "ERROR_ON_WARNINGS", False):
        return ExitCodes.EXIT_WARNINGS.value
    return ExitCodes.SUCCESS.value


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)
    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main"),
        )
    sys.exit(run(args))


if __name__ == "__main__":
    main()
