"""Main CLI entry point for the sfxml command-line tool.

Reads markup from standard input, formats it and writes the result to
standard output. No option changes how the markup is laid out.
"""

import argparse
import logging
import os
import sys
from typing import BinaryIO, List, Optional

from streaming_xml_formatter import __version__
from streaming_xml_formatter.shared.config import FormatterConfig, StreamingConfig
from streaming_xml_formatter.shared.logging import get_logger
from streaming_xml_formatter.shared.result import DiagnosticSeverity
from streaming_xml_formatter.stream import FormatStreamProcessor

PROG = "sfxml"

USAGE = (
    "Usage: sfxml\n"
    "\n"
    "Reads XML data from stdin, formats and indents it and writes the result to\n"
    "stdout.\n"
    "\n"
    "Unlike validating tools such as xmllint --format, this program does not\n"
    "check that the input is valid XML. Formatting is done on a best effort\n"
    "basis following basic rules, so the output stays consistent even for\n"
    "incomplete data and the tool never refuses input it does not understand.\n"
    "\n"
    "Line breaks and indentation are added after opening and closing tags,\n"
    "while escaped characters and text in double or single quotes are left\n"
    "as-is.\n"
    "\n"
    "Example usage:\n"
    "   $ sfxml < file.xml\n"
    "   $ echo \"<html><head/><body><div>A</div><div>B</div></body>\" | sfxml\n"
    "\n"
    "The options --version, -v/--verbose and -q/--quiet only print the version or\n"
    "adjust logging on stderr; none of them changes the layout.\n"
)


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self):
        self.chunk_size = 8192
        self.verbose = False
        self.quiet = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "CLIConfig":
        """Build CLI configuration from parsed arguments."""
        config = cls()
        config.verbose = args.verbose
        config.quiet = args.quiet
        return config

    @property
    def log_level(self) -> int:
        if self.verbose:
            return logging.DEBUG
        if self.quiet:
            return logging.ERROR
        return logging.WARNING

    def formatter_config(self) -> FormatterConfig:
        """Formatter configuration for a CLI run: flush every chunk for live pipes."""
        return FormatterConfig(
            streaming=StreamingConfig(chunk_size=self.chunk_size, flush_each_chunk=True),
            diagnostic_level="DEBUG" if self.verbose else "WARNING",
        )


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Format and indent XML-like data from stdin without validating it",
        epilog="No option changes the layout of the output.",
    )
    parser.add_argument("--version", action="version", version=__version__)

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug information and all diagnostics to stderr"
    )
    verbosity.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log errors"
    )
    return parser


def _binary(stream) -> BinaryIO:
    """Underlying byte stream of a text stream such as sys.stdin."""
    return getattr(stream, "buffer", stream)


def _is_interactive(stream) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def _discard_stdout() -> None:
    """Point the stdout descriptor at the null device.

    After the reader of a pipe has gone, the interpreter's final flush of
    sys.stdout would raise BrokenPipeError again at exit.
    """
    try:
        fd = sys.stdout.fileno()
    except (AttributeError, OSError, ValueError):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, fd)
    finally:
        os.close(devnull)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    config = CLIConfig.from_args(args)

    logging.basicConfig(
        level=config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logger = get_logger(__name__, None, "cli")

    if _is_interactive(sys.stdin):
        print(USAGE, file=sys.stderr)
        return 0

    processor = FormatStreamProcessor(config.formatter_config())
    try:
        result = processor.process_stream(_binary(sys.stdin), _binary(sys.stdout))
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT

    if not result.success:
        if result.metadata.get("error_type") == "BrokenPipeError":
            _discard_stdout()
            return 0
        for diagnostic in result.diagnostics:
            print(f"{PROG}: {diagnostic.message}", file=sys.stderr)
        return 1

    for diagnostic in result.diagnostics:
        extra = {"position": diagnostic.position}
        if diagnostic.severity is DiagnosticSeverity.WARNING:
            logger.warning(diagnostic.message, extra=extra)
        else:
            logger.debug(diagnostic.message, extra=extra)

    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
