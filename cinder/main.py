"""Runs the cinder interpreter on a file, or in command-line mode when no file is given. Uses the error handling
context manager for I/O and internal failures. Installed as the cinder executable script.
"""

import argparse
import logging
import sys

from cinder.lang.error import ErrorHandler
from cinder.lang.session import Session
from cinder.lang.shell import Shell

EX_DATAERR = 65   # scan/parse errors
EX_SOFTWARE = 70  # runtime errors


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="cinder", description="cinder language interpreter")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--no-color", help="never color error messages", action="store_true")
    parser.add_argument("-v", "--verbose", help="log interpreter phases to stderr", action="store_true")
    return parser.parse_args(argv)


def main(argv=None, out=None):
    """Runs cinder interpreter. Returns the process exit code."""
    args = parse_args(argv)
    if out is None:
        out = sys.stdout

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    color = False if args.no_color else None

    with ErrorHandler(out, color):
        sess = Session(out, color)

        if args.file is None:
            Shell(sess, stdout=out).cmdloop()
            return 0

        sess.run_file(args.file)
        if sess.had_error:
            return EX_DATAERR
        if sess.had_runtime_error:
            return EX_SOFTWARE
        return 0

    return 1  # only reached on keyboard interrupt


if __name__ == "__main__":
    sys.exit(main())
