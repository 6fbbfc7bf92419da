"""
Trace output

Diagnostic lines printed to stderr when rawgen runs with -v.
"""

import sys

verbose = False


def set_verbose(enabled: bool) -> None:
    global verbose
    verbose = enabled


def trace(*parts) -> None:
    """Print a diagnostic line to stderr when verbose output is enabled."""
    if verbose:
        print(*parts, file=sys.stderr)
