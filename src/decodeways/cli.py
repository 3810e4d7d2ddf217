# src/decodeways/cli.py

"""
Decode Ways - count the decodings of a digit string (A=1 ... Z=26)

Description:
    Reads a file holding a string of decimal digits and prints how many
    distinct letter strings it can be decoded into. The count is exact and
    may have any number of digits.

usage: decodeways <filename> [--profile NAME] [--debug]

Exit status:
    0  count printed on stdout
    1  missing argument, unreadable file, invalid digit string or profile
"""

from __future__ import annotations

import argparse
import faulthandler
import os
import sys
import textwrap
import threading
import time
import traceback

from colorama import Fore, Style
from colorama import init as colorama_init

from decodeways import __version__ as _ver
from decodeways import config as CONFIG
from decodeways.counter import ClusterCounter
from decodeways.dataio import read_digits, strip_ascii_whitespace
from decodeways.errors import DecodeError
from decodeways.fibcache import default_cache
from decodeways.fmt import format_count
from decodeways.runtime import APPLY, CFG
from decodeways.runtime import current as _rt_current
from decodeways.runtime import reset as _rt_reset
from decodeways.utility import (
    UserInputError,
    dec_digits,
    flatten_dotted,
    lift_int_str_limit,
    typename,
)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def _install_loud_error_handlers(debug: bool) -> None:
    if not debug:
        return
    # Always show full Python tracebacks; needs a real stderr file descriptor
    try:
        faulthandler.enable()
    except (OSError, ValueError):
        pass

    def _excepthook(exc_type, exc, tb):
        sys.stderr.write("\n[UNCAUGHT EXCEPTION]\n")
        traceback.print_exception(exc_type, exc, tb, file=sys.stderr)
        sys.stderr.flush()
    sys.excepthook = _excepthook

    def _thread_excepthook(args):
        sys.stderr.write("\n[UNCAUGHT THREAD EXCEPTION]\n")
        traceback.print_exception(args.exc_type, args.exc_value, args.exc_traceback, file=sys.stderr)
        sys.stderr.flush()
    threading.excepthook = _thread_excepthook


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    # Keep an existing "Error ...:" head, otherwise prefix one
    if msg.startswith("Error"):
        head, sep, tail = msg.partition(":")
        msg = f"{Fore.RED}{head}{sep}{Style.RESET_ALL}{tail}"
    else:
        msg = f"{Fore.RED}Error:{Style.RESET_ALL} {msg}"
    print(msg, file=sys.stderr)


def _debug(msg: str) -> None:
    print(f"{Style.DIM}[debug]{Style.RESET_ALL} {msg}", file=sys.stderr)


def _print_usage() -> None:
    print("Usage: decodeways <filename>", file=sys.stderr)
    print("Example: decodeways test2.txt", file=sys.stderr)


# ---- argparse ----
class _ArgumentParser(argparse.ArgumentParser):
    """Report bad usage with exit status 1 like every other failure."""

    def error(self, message):
        self.print_usage(sys.stderr)
        _print_user_error(message)
        raise SystemExit(EXIT_FAILURE)


def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    profiles:
      Profiles are TOML files looked up in $DECODEWAYS_HOME/profiles
      (default ~/Documents/DecodeWays/profiles), then among the packaged ones:
        default  count the file bytes exactly as stored, print the full count
        trim     strip surrounding whitespace before counting
        short    abbreviate huge counts as head…tail
    """)

    p = _ArgumentParser(
        prog="decodeways",
        description="Decode Ways — count the decodings of a digit string (A=1 … Z=26)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("file", nargs="?", metavar="FILE", help="file holding the digit string")
    p.add_argument("--profile", default=None, help="settings profile to apply (default: 'default')")
    p.add_argument("--debug", action="store_true", help="Show profile settings, timings and cluster statistics")
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")
    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_user_error(str(e))
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        if _rt_current().debug:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return EXIT_FAILURE


def _apply_profile(name: str | None, debug: bool) -> None:
    if name and not CONFIG.has_profile(name):
        raise UserInputError(
            f"Unknown profile: '{name}'. Available profiles: "
            + ", ".join(CONFIG.list_all_profiles())
        )

    selected = CONFIG.load_settings(name or "default")
    APPLY(selected)

    if not (debug or _rt_current().debug):
        return
    _debug(f"active profile: {selected.name} — {selected.description}")
    if selected._source:
        _debug(f"profile file: {selected._source}")
    flat = flatten_dotted(_rt_current().settings)
    for k in sorted(flat.keys(), key=str.lower):
        v = CFG(k, None)
        print(f"        {k:.<40} {v!r} ({typename(v)})", file=sys.stderr)


# ---- main ----
def _main_impl(argv=None) -> int:

    colorama_init(autoreset=True)

    parser = _build_parser()
    args = parser.parse_args(argv)
    rt = _rt_reset()
    rt.debug = bool(args.debug)

    if args.file is None:
        _print_usage()
        return EXIT_FAILURE

    _apply_profile(args.profile, rt.debug)
    debug = _rt_current().debug
    _install_loud_error_handlers(debug)

    # decode counts grow exponentially; respect an explicit interpreter limit only
    if not os.environ.get("PYTHONINTMAXSTRDIGITS"):
        lift_int_str_limit()

    t0 = time.perf_counter()
    try:
        data = read_digits(args.file)
    except OSError as e:
        reason = e.strerror or str(e)
        _print_user_error(f"Error opening file '{args.file}': {reason}")
        return EXIT_FAILURE
    if debug:
        _debug(f"read {len(data)} bytes from {args.file} in {(time.perf_counter() - t0) * 1000:.2f} ms")

    if CFG("INPUT.STRIP_WHITESPACE", False):
        data = strip_ascii_whitespace(data)

    t0 = time.perf_counter()
    try:
        report = ClusterCounter(default_cache()).analyze(data)
    except DecodeError as e:
        _print_user_error(f"Error decoding: {e}")
        return EXIT_FAILURE

    if debug:
        _debug(
            f"scanned {report.length} digits in {(time.perf_counter() - t0) * 1000:.2f} ms: "
            f"{report.clusters} cluster(s), longest {report.longest_cluster} pair(s)"
        )
        _debug(f"result has {dec_digits(report.count)} decimal digit(s)")

    print(format_count(report.count))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
