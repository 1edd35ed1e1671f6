"""mktemp(1)-style front end for tempscope.

Without ``--exec`` the created path is released and printed, exactly like
``mktemp``. With ``--exec`` the path lives only as long as the command.
"""

from __future__ import annotations

import argparse
import logging
import subprocess
import sys
from typing import List, Optional

from tempscope import DisposalError, PathInputError, TempPath

logger = logging.getLogger("tempscope.mktemp")


def _setup_logging(loglevel: int) -> None:
    """Console logging with timestamps for the tempscope loggers."""
    root = logging.getLogger("tempscope")
    root.setLevel(loglevel)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        root.addHandler(handler)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tempscope-mktemp", description="Create a uniquely named temporary path.")
    kind = p.add_mutually_exclusive_group()
    kind.add_argument("-d", "--directory", action="store_true", help="Create a directory instead of a file")
    kind.add_argument(
        "-u", "--unbound", action="store_true", help="Only generate a name; create nothing"
    )
    p.add_argument("--suffix", type=str, default=None, help="File extension, with or without the leading dot")
    p.add_argument("-p", "--tmpdir", type=str, default=None, help="Base directory (default: TS_TEMP_DIR or system temp)")
    p.add_argument(
        "--policy",
        type=str,
        default=None,
        choices=["never", "unless_not_found", "always"],
        help="Disposal failure policy when used with --exec",
    )
    p.add_argument("--keep", action="store_true", help="With --exec, keep the path after the command exits")
    p.add_argument("-v", "--verbose", action="store_true")
    p.add_argument(
        "--exec",
        dest="command",
        nargs=argparse.REMAINDER,
        default=None,
        help="Run COMMAND with the path appended as its last argument, then remove the path",
    )
    return p


def _create(args: argparse.Namespace) -> TempPath:
    if args.suffix is not None and (args.directory or args.unbound):
        raise PathInputError("--suffix only applies to files")
    if args.directory:
        return TempPath.new_dir(args.tmpdir, disposal_policy=args.policy)
    if args.unbound:
        return TempPath.new_unbound_path(args.tmpdir, disposal_policy=args.policy)
    if args.suffix is not None:
        return TempPath.new_file_with_extension(args.suffix, args.tmpdir, disposal_policy=args.policy)
    return TempPath.new_file(args.tmpdir, disposal_policy=args.policy)


def _run_scoped(temp: TempPath, command: List[str], keep: bool) -> int:
    with temp:
        argv = [*command, str(temp)]
        logger.debug("Running %s", argv)
        rc = subprocess.call(argv)
        if keep:
            temp.release()
    return rc


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command is None and (args.policy is not None or args.keep):
        parser.error("--policy and --keep only apply with --exec")
    if args.verbose:
        _setup_logging(logging.DEBUG)

    if args.command is not None and not args.command:
        print("[mktemp] error: --exec requires a command", file=sys.stderr)
        return 1

    try:
        temp = _create(args)
    except (OSError, PathInputError) as e:
        print(f"[mktemp] error: {e}", file=sys.stderr)
        return 1

    if args.command is None:
        print(temp.release())
        return 0

    try:
        return _run_scoped(temp, args.command, args.keep)
    except FileNotFoundError as e:
        # the temp path was already disposed by the with block
        print(f"[mktemp] error: {e}", file=sys.stderr)
        return 127
    except PermissionError as e:
        print(f"[mktemp] error: {e}", file=sys.stderr)
        return 126
    except OSError as e:
        print(f"[mktemp] error: {e}", file=sys.stderr)
        return 1
    except DisposalError as e:
        print(f"[mktemp] error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
