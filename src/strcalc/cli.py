"""Command-line interface for strcalc."""

from __future__ import annotations

import argparse
import io
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from strcalc.errors import EvalError, LexWarning, ParseError, SourceReadError, StrcalcError
from strcalc.eval import DEFAULT_MAX_RESULT_BYTES
from strcalc.parser import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT

CONFIG_NAME = "strcalc.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None
    output_file: Path | None
    show_ast: bool
    max_result_bytes: int
    max_depth: int
    verbose: bool

    @property
    def filename(self) -> str:
        return str(self.input_file) if self.input_file is not None else "<stdin>"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="strcalc",
        description="Evaluate strcalc string expressions",
    )
    p.add_argument("input", nargs="?", default="-", help="Program file (default: stdin)")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("--no-ast", action="store_true", help="Do not print the AST dump")
    p.add_argument(
        "--max-result-bytes",
        type=int,
        default=None,
        metavar="N",
        help=f"Largest result evaluation may build (default: {DEFAULT_MAX_RESULT_BYTES})",
    )
    p.add_argument(
        "--max-depth",
        type=int,
        default=None,
        metavar="N",
        help=f"Parser nesting limit, at most {MAX_DEPTH_LIMIT} (default: {DEFAULT_MAX_DEPTH})",
    )
    p.add_argument(
        "-v", "--verbose", action="store_true", help="Show source context for errors"
    )
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def _positive_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise argparse.ArgumentTypeError(f"{name} must be a positive integer, got {value!r}")
    return value


def _depth_limit(value: Any, name: str) -> int:
    depth = _positive_int(value, name)
    if depth > MAX_DEPTH_LIMIT:
        raise argparse.ArgumentTypeError(f"{name} must be at most {MAX_DEPTH_LIMIT}, got {depth}")
    return depth


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = None if args.input == "-" else Path(args.input)
    input_dir = input_file.parent if input_file is not None else Path(".")
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    show_ast = True
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_ast = cfg_output.get("ast")
        if isinstance(cfg_ast, bool):
            show_ast = cfg_ast
    if args.no_ast:
        show_ast = False

    max_result_bytes = DEFAULT_MAX_RESULT_BYTES
    max_depth = DEFAULT_MAX_DEPTH
    cfg_limits = config.get("limits")
    if isinstance(cfg_limits, dict):
        if "max_result_bytes" in cfg_limits:
            max_result_bytes = _positive_int(
                cfg_limits["max_result_bytes"], "limits.max_result_bytes"
            )
        if "max_depth" in cfg_limits:
            max_depth = _depth_limit(cfg_limits["max_depth"], "limits.max_depth")
    if args.max_result_bytes is not None:
        max_result_bytes = _positive_int(args.max_result_bytes, "--max-result-bytes")
    if args.max_depth is not None:
        max_depth = _depth_limit(args.max_depth, "--max-depth")

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        show_ast=show_ast,
        max_result_bytes=max_result_bytes,
        max_depth=max_depth,
        verbose=args.verbose,
    )


def run_program(options: CliOptions, out: TextIO) -> None:
    """Parse the input, dump the AST, evaluate, and write the result to *out*."""
    from strcalc.debug import dump_ast
    from strcalc.eval import evaluate
    from strcalc.parser import parse

    def report(warning: LexWarning) -> None:
        print(warning.format(options.filename), file=sys.stderr)

    if options.input_file is None:
        stdin = sys.stdin
        # Undecodable bytes reach the lexer as lone surrogates and are skipped
        if isinstance(stdin, io.TextIOWrapper):
            stdin.reconfigure(errors="surrogateescape")
        tree = parse(stdin, options.filename, report, options.max_depth)
    else:
        with open(options.input_file, encoding="utf-8", errors="surrogateescape") as f:
            tree = parse(f, options.filename, report, options.max_depth)

    if options.show_ast:
        dump_ast(tree, file=out)
        out.flush()

    result = evaluate(tree, options.max_result_bytes)
    out.write(result.decode())
    out.write("\n")


def _report_error(exc: StrcalcError, options: CliOptions) -> None:
    if options.verbose:
        print(exc.format(options.filename), file=sys.stderr)
    else:
        print(exc.summary(options.filename), file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    try:
        if options.output_file:
            # Leave an existing output file alone unless the run succeeds
            buf = io.StringIO()
            run_program(options, buf)
            options.output_file.write_text(buf.getvalue(), encoding="utf-8")
        else:
            run_program(options, sys.stdout)
    except (SourceReadError, ParseError) as exc:
        _report_error(exc, options)
        return 1
    except EvalError as exc:
        _report_error(exc, options)
        return 2
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    return 0
