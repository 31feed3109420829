#!/usr/bin/env python3


import logging

import click

from . import __version__
from .renamer import rename_media_files
from .template import DEFAULT_PRESET, PRESETS, select_name_format
from .types import Options

PRESET_HELP = "Use predefined format preset (default: 0): " + ", ".join(
    f"{i}: {fmt}" for i, fmt in enumerate(PRESETS)
)


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog="If a FILE is given, only that file is processed. "
    "If a DIRECTORY is given, the media files in it are processed. "
    "Use '.' for the current directory.",
)
@click.argument("target", metavar="FILE | DIRECTORY", type=click.Path(exists=True))
@click.option("-p", "--preset", type=int, default=DEFAULT_PRESET, help=PRESET_HELP)
@click.option(
    "-f",
    "--format",
    "custom_format",
    type=click.STRING,
    default=None,
    help="Use custom format (strftime-compatible, %f for sub-seconds; overrides preset)",
)
@click.option("-s", "--simulate", is_flag=True, help="Perform a dry run (do not rename files)")
@click.option("-r", "--recursive", is_flag=True, help="Recursively process directories")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="INFO",
    help="Set the logging level (default: INFO)",
)
@click.version_option(__version__, "-v", "--version", message="%(version)s")
def main(
    target: str,
    preset: int,
    custom_format: str | None,
    simulate: bool,
    recursive: bool,
    log_level: str,
) -> None:
    """Rename photos and videos based on their EXIF capture timestamp."""
    # Set up logging
    level = getattr(logging, log_level.upper())
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    # When not in debug mode, only show our own messages
    if level != logging.DEBUG:
        # exifread logs a warning for every file it doesn't recognize
        logging.getLogger("exifread").setLevel(logging.ERROR)
        for logger_name in logging.root.manager.loggerDict:
            if not logger_name.startswith(("rename_media_files", "exifread")):
                logging.getLogger(logger_name).setLevel(logging.WARNING)

    options = Options(
        name_format=select_name_format(preset, custom_format),
        simulate=simulate,
        recursive=recursive,
    )

    rename_media_files(target, options)


if __name__ == "__main__":
    main()
