"""
Module related to the argument parsing
"""
import stat
import sys
from argparse import ArgumentParser, Namespace
from importlib import resources
from pathlib import Path
from shutil import copy2
from typing import Tuple

from clipclean.version import __version__
from clipclean import xdg


def parse_args(CONFIG_PATH: Path, argv=None):
    """
    Parse the arguments from the command line
    """
    parser = ArgumentParser('clipclean')
    parser.add_argument(
        "-c",
        "--check-config",
        dest="check_config",
        action='store_true',
        help='Check the config file and list the rules')
    parser.add_argument(
        "-d",
        "--debug",
        dest="debug",
        help="The file where debug will be written",
        metavar="DEBUG_FILE")
    parser.add_argument(
        "-f",
        "--file",
        dest="filename",
        default=CONFIG_PATH / 'clipclean.cfg',
        type=Path,
        help="The config file you want to use",
        metavar="CONFIG_FILE")
    parser.add_argument(
        "-s",
        "--sanitize",
        dest="sanitize",
        action='store_true',
        help='Clean the URLs of the standard input, print the result and exit')
    parser.add_argument(
        "--reset-count",
        dest="reset_count",
        action='store_true',
        help='Reset the number of cleaned URLs and exit')
    parser.add_argument(
        '-v',
        '--version',
        action='version',
        version='Clipclean v%s' % __version__,
    )
    return parser.parse_args(argv)


def run_cmdline_args(argv=None) -> Tuple[Namespace, bool]:
    "Parse the command line arguments"
    options = parse_args(xdg.CONFIG_HOME, argv)
    firstrun = False

    # Copy a default file if none exists
    if not options.filename.is_file():
        try:
            options.filename.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            sys.stderr.write(
                'Clipclean was unable to create the config directory: %s\n' % e)
            sys.exit(1)
        default = resources.files('clipclean') / 'default_config.cfg'
        if default.is_file():
            with resources.as_file(default) as default_path:
                copy2(str(default_path), str(options.filename))

        # The packaged file may be readonly, and so is the copy.
        # Make it writable by the user who just created it.
        if options.filename.exists():
            options.filename.chmod(options.filename.stat().st_mode
                                   | stat.S_IWUSR)
        firstrun = True

    return (options, firstrun)
