"""
vsf: align delimiter-separated text into columns.

Reads everything from stdin (or a file), pads each column to the width of its
widest cell and prints the result. Meant for shell pipelines, e.g. before
handing a listing to fzf or less.
"""
import argparse
import io
import os
import re
import signal
import sys
import traceback

from . import __version__
from .core import (EmptyInputError, align_basic, align_skipping_lines,
                   align_with_header, align_with_separator)
from .utils import logging as ULOG
from .utils import parsing as UP


EXAMPLES = """\
Example:
  echo -e "name:john\\nage:30\\ncity:new york" | vsf
  Output:
    name : john
    age  : 30
    city : new york

  printf 'Index:Directory\\n5:/long/path\\n0:/short\\n' | vsf -S 0
  Output:
    Index : Directory
    ------:----------
    5     : /long/path
    0     : /short
"""


# --------------------------
# Argument Parser
# --------------------------
class HelpFormatter(argparse.ArgumentDefaultsHelpFormatter, argparse.RawTextHelpFormatter):
    """Shows defaults and keeps the hand-wrapped description and examples."""


class CustomArgumentParser(argparse.ArgumentParser):
    def __init__(self, *args, **kwargs):
        kwargs.setdefault('formatter_class', HelpFormatter)
        super().__init__(*args, **kwargs)

    def error(self, message: str):
        use_color = sys.stderr.isatty() and os.getenv("NO_COLOR") is None
        red, reset = ("\033[91m", "\033[0m") if use_color else ("", "")

        error_line = f"{red}ERROR:{reset} {message[:1].upper()}{message[1:]}"
        border = "-" * (len(re.sub(r"\033\[\d+m", "", error_line)) + 4)
        sys.stderr.write(f"\n{border}\n  {error_line}\n{border}\n")
        sys.stderr.write(f"Run '{self.prog} -h' for usage.\n")
        self.exit(2)


def _cli_value(func):
    """Adapts a parsing helper so argparse reports its own error message."""
    def wrapper(value):
        try:
            return func(value)
        except ValueError as e:
            raise argparse.ArgumentTypeError(str(e))
    wrapper.__name__ = func.__name__
    return wrapper


def build_parser() -> argparse.ArgumentParser:
    parser = CustomArgumentParser(
        prog="vsf",
        description=(
            "Formats input text by aligning columns based on a specified delimiter.\n"
            "Input is read from stdin. Each line is split by the delimiter, and columns are padded\n"
            "to align with the widest entry in each column. Delimiters inside quotes are ignored."
        ),
        epilog=EXAMPLES,
    )

    io_group = parser.add_argument_group("Input/Output")
    io_group.add_argument("-d", "--delimiter", type=_cli_value(UP.decode_delimiter), default=":",
                          help="Input delimiter. Escape sequences such as '\\t' are accepted.")
    io_group.add_argument("-o", "--output-delimiter", type=_cli_value(UP.decode_output_delimiter), default=None,
                          help="Delimiter used in the output; falls back to --delimiter when unset.")
    io_group.add_argument("-f", "--file", default=None,
                          help="Read from this file instead of stdin.")
    io_group.add_argument("--encoding", default="utf-8",
                          help="Input encoding; undecodable bytes are replaced.")
    io_group.add_argument("--strict-quotes", action="store_true",
                          help="Close a quoted span only on the quote character that opened it.")

    layout = parser.add_argument_group("Layout (pick one)")
    modes = layout.add_mutually_exclusive_group()
    modes.add_argument("-H", "--header", type=int, default=None, metavar="N",
                       help="Print the first N lines as-is and leave them out of the width calculation.")
    modes.add_argument("-s", "--skip-lines", type=_cli_value(UP.parse_line_numbers), default=None,
                       metavar="LIST",
                       help="Comma separated 0-based line numbers to print as-is, e.g. '0,2'.")
    modes.add_argument("-S", "--separator", type=int, default=None, metavar="N",
                       help="Insert a separator line after output line N (0-based).")
    layout.add_argument("-c", "--separator-char", type=_cli_value(UP.decode_fill_char), default=None,
                        help="Character used to draw the separator line; unset means '-'. Needs --separator.")

    misc = parser.add_argument_group("Logging")
    misc.add_argument("--quiet", action="store_true", help="Only report errors.")
    misc.add_argument("--debug", action="store_true", help="Verbose diagnostics and tracebacks on stderr.")
    misc.add_argument("--log-file", default=None, help="Also write log records to this file.")
    parser.add_argument("--version", action="version", version=__version__)
    return parser


# --------------------------
# Main Execution
# --------------------------
def read_input(args: argparse.Namespace) -> str:
    """Buffers the whole input; stdin is reopened so --encoding applies."""
    if args.file:
        with open(args.file, "r", encoding=args.encoding, errors="replace") as handle:
            return handle.read()
    try:
        stream = open(sys.stdin.fileno(), mode="r", encoding=args.encoding,
                      errors="replace", closefd=False)
    except (AttributeError, io.UnsupportedOperation):
        # stdin replaced by an in-memory stream
        return sys.stdin.read()
    with stream:
        return stream.read()


def run_alignment(text: str, args: argparse.Namespace, logger) -> str:
    """Calls the one entry point matching the layout option that was given."""
    delimiter = args.delimiter
    output_delimiter = args.output_delimiter or ""

    if args.header is not None:
        logger.debug("header mode: %d leading line(s) kept as-is", args.header)
        return align_with_header(text, delimiter, output_delimiter, args.header, args.strict_quotes)
    if args.skip_lines is not None:
        logger.debug("skip mode: lines %s kept as-is", args.skip_lines)
        return align_skipping_lines(text, delimiter, output_delimiter, args.skip_lines, args.strict_quotes)
    if args.separator is not None:
        logger.debug("separator mode: '%s' line after output line %d", args.separator_char, args.separator)
        return align_with_separator(text, delimiter, output_delimiter, args.separator,
                                    args.separator_char, args.strict_quotes)
    logger.debug("basic mode")
    return align_basic(text, delimiter, output_delimiter, args.strict_quotes)


def main(argv=None) -> int:
    """Main entry point for the script."""
    argv = sys.argv[1:] if argv is None else argv

    try:
        signal.signal(signal.SIGPIPE, signal.SIG_DFL)
    except (AttributeError, ValueError):
        pass

    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        if args.separator_char is not None and args.separator is None:
            parser.error("argument -c/--separator-char: only applies together with -S/--separator")
    except SystemExit as e:
        return 0 if e.code == 0 else 2
    if args.separator_char is None:
        args.separator_char = "-"

    try:
        ULOG.configure(quiet=args.quiet, debug=args.debug, log_file=args.log_file)
    except OSError as e:
        sys.stderr.write(f"Error opening log file: {e}\n")
        return 3
    logger = ULOG.get_logger("cli")

    try:
        text = read_input(args)
    except (OSError, LookupError) as e:
        logger.error(f"cannot read input: {e}")
        if args.debug: traceback.print_exc()
        return 3
    logger.debug("read %d line(s), delimiter %r, output delimiter %r",
                 len(text.strip().split("\n")), args.delimiter, args.output_delimiter or args.delimiter)

    try:
        output = run_alignment(text, args, logger)
    except EmptyInputError as e:
        logger.error(str(e))
        return 1

    try:
        sys.stdout.write(output + "\n")
        sys.stdout.flush()
    except BrokenPipeError:
        try: sys.stdout.close()
        except OSError: pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
