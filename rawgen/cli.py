"""Command line entry point."""

import argparse
import sys

from .errors import RawgenError
from .trace import set_verbose
from .walker import walk


def parse_args(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog="rawgen",
        description="Generate exported types and codecs for raw record types",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s ./pkg
  %(prog)s -v ./pkg/records.py
        """
    )

    parser.add_argument('path', metavar='PATH',
                        help='File or directory to process')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable trace output')

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point"""
    args = parse_args(argv)
    set_verbose(args.verbose)

    try:
        walk(args.path)
    except RawgenError as e:
        print(f"rawgen: error: {e}", file=sys.stderr)
        return 1

    return 0
