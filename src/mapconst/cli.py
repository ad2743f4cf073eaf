"""Command-line interface for mapconst."""

from __future__ import annotations

import argparse
import logging
import sys

from mapconst.contract.errors import MapConstError
from mapconst.contract.output import STDOUT_DESTINATION
from mapconst.render.write import GenerateOptions, build_output, write_output
from mapconst.rules.config import ConfigError
from mapconst.utils import split_comma_list
from mapconst.verify.verify import verify_output

EXIT_FAILURE = 1
EXIT_USAGE = 2

_LOG_PREFIX = "mapconst: "

# Flags that change how a run behaves, not what it generates; they are left
# out of the invocation recorded in the header.
_RUN_ONLY_FLAGS = frozenset({"--check", "-v", "--verbose"})


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mapconst",
        description=(
            "Generate a map[string]T from constant names to values for each "
            "type T declared in a Go package."
        ),
    )
    parser.add_argument(
        "-t",
        "--type",
        dest="types",
        action="append",
        required=True,
        metavar="T[,T...]",
        help="comma-separated list of type names; must be set (repeatable)",
    )
    parser.add_argument(
        "-o",
        "--output",
        default="",
        help=(
            "output file name; 'stdout' prints the result "
            "(default: srcdir/<type>_mapconst.go)"
        ),
    )
    parser.add_argument(
        "--tags",
        default="",
        help="comma-separated list of extra build tags",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="verify the output file is up to date instead of writing it",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log file selection and match counts",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        metavar="PATH",
        help="one package directory or a list of Go files (default: .)",
    )
    return parser


def _configure_logging(verbose: bool) -> logging.Handler:
    logger = logging.getLogger("mapconst")
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(f"{_LOG_PREFIX}%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return handler


def _invocation(argv: list[str]) -> str:
    return " ".join(arg for arg in argv if arg not in _RUN_ONLY_FLAGS)


def _fail(exc: Exception, code: int) -> int:
    sys.stderr.write(f"{_LOG_PREFIX}{exc}\n")
    return code


def _handle_check(options: GenerateOptions) -> int:
    result = verify_output(options)
    if not result.ok:
        sys.stderr.write(f"{result.status}: {result.path}\n")
        return EXIT_FAILURE
    return 0


def _handle_generate(options: GenerateOptions) -> int:
    generated = build_output(options)
    write_output(generated)
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = _build_parser()
    args = parser.parse_args(argv)

    type_names = split_comma_list(args.types)
    if not type_names:
        parser.error("at least one type name must be set")
    if args.check and args.output == STDOUT_DESTINATION:
        parser.error("--check cannot verify output written to stdout")

    handler = _configure_logging(args.verbose)

    options = GenerateOptions(
        type_names=type_names,
        paths=tuple(args.paths) or (".",),
        output=args.output,
        invocation=_invocation(argv),
        extra_tags=split_comma_list([args.tags]),
    )

    try:
        if args.check:
            return _handle_check(options)
        return _handle_generate(options)
    except ConfigError as exc:
        return _fail(exc, EXIT_USAGE)
    except MapConstError as exc:
        return _fail(exc, EXIT_FAILURE)
    finally:
        logging.getLogger("mapconst").removeHandler(handler)


if __name__ == "__main__":
    raise SystemExit(main())
