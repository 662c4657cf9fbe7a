import argparse
import logging
import os
import sys

import colorama

from utitool import __version__
from utitool.aggregate import aggregate_dump
from utitool.errors import EnvironmentFailure, SerializationFailure
from utitool.formatter import OutputOptions, Palette, write_registry
from utitool.lsregister import dump_registry
from utitool.progress import ProgressDots
from utitool.queries import get_extension_data, get_file_data, get_uti_data
from utitool.stdio import report, report_error_and_exit
from utitool.typeinfo import TypeRegistry

logger = logging.getLogger(__name__)

EXIT_CTRL_C_CODE = 130

EXAMPLES = """examples:
  utitool *                      Get data for all the files in the working directory.
  utitool text.md                Get data for a named file in the working directory.
  utitool -m text.md             Include extra UTI information for the file.
  utitool ../text1.md            Get data for a named file in the parent directory.
  utitool -e md                  Get data about UTIs associated with the file extension md.
  utitool -u com.bps.rust-source Get data about the UTI com.bps.rust-source.
  utitool -l                     List every UTI in the Launch Services registry.
  utitool -aj | jq               List registry apps and their UTIs as JSON.
"""


def build_parser():
    parser = argparse.ArgumentParser(
        prog="utitool",
        description="A macOS tool to reveal a specified file's Uniform Type Identifier (UTI). "
        "It can also display information about a specific UTI or file extension, "
        "and list the UTIs known to Launch Services.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-e", "--extension", action="append", dest="extensions", default=[],
                        metavar="EXTENSION", help="show the UTIs bound to a file extension")
    parser.add_argument("-u", "--uti", action="append", dest="utis", default=[],
                        metavar="UTI", help="show information about a UTI")
    parser.add_argument("-m", "--more", action="store_true", help="include extra UTI information for files")
    parser.add_argument("-l", "--list", action="store_true", dest="list_utis",
                        help="list the UTIs in the Launch Services registry")
    parser.add_argument("-a", "--apps", action="store_true", dest="list_apps",
                        help="list registry apps and the UTIs they claim")
    parser.add_argument("-j", "--json", action="store_true", dest="json_output",
                        help="output registry listings as JSON on stdout")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="log progress (repeat for debug output)")
    parser.add_argument("--no-colour", "--no-color", action="store_true", dest="no_colour",
                        help="disable coloured output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("paths", nargs="*", help="files to report on")
    return parser


def configure_logging(verbosity):
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def use_colour(args, stream):
    if args.no_colour or os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class RegistrySource:
    """Runs the registry dump at most once per invocation."""

    def __init__(self, err, runner=None):
        self.err = err
        self.runner = runner
        self._text = None
        self._types = None

    def text(self):
        if self._text is None:
            with ProgressDots(self.err):
                self._text = dump_registry(self.runner)
        return self._text

    def types(self):
        if self._types is None:
            text = self.text()
            with ProgressDots(self.err):
                self._types = TypeRegistry.from_dump(text)
        return self._types


def list_registry(source, options, out, err):
    report("Obtaining Launch Services' registry data", err)
    text = source.text()
    with ProgressDots(err):
        aggregator = aggregate_dump(text, by_app=options.by_app)
    write_registry(aggregator, options, out)


def run(args, out, err, runner=None):
    colour = use_colour(args, out)
    palette = Palette() if colour else Palette.plain()
    source = RegistrySource(err, runner)

    for extension in args.extensions:
        get_extension_data(extension, source.types(), out, palette)
    for uti in args.utis:
        get_uti_data(uti, source.types(), out, palette)

    if args.list_apps:
        list_registry(source, OutputOptions(args.json_output, True, colour), out, err)
    if args.list_utis:
        list_registry(source, OutputOptions(args.json_output, False, colour), out, err)

    for path in args.paths:
        get_file_data(path, out, palette, more=args.more, registry_loader=source.types, runner=runner, err=err)

    if not (args.paths or args.extensions or args.utis or args.list_apps or args.list_utis):
        report("No files specified or present", err)
    return 0


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()
    if not argv:
        parser.print_help(sys.stderr)
        return 0

    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    logger.debug("Arguments: %s", args)
    colour = use_colour(args, sys.stdout)
    if colour:
        colorama.init()

    try:
        return run(args, sys.stdout, sys.stderr)
    except KeyboardInterrupt:
        report("\rutitool interrupted -- halting", sys.stderr)
        return EXIT_CTRL_C_CODE
    except EnvironmentFailure as exc:
        report_error_and_exit(str(exc), exc.status, colour=colour)
    except SerializationFailure as exc:
        report_error_and_exit(str(exc), colour=colour)
