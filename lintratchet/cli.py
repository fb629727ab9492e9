"""
Command-line interface for the lint ratchet.

``lintratchet check`` is what the pre-commit hook runs: it receives the
changed files as arguments and exits with

  0  suppression counts unchanged
  1  a suppression was added or got worse (commit rejected)
  2  suppressions went down and the baseline was rewritten (re-stage it)
  3  the run could not be completed (unreadable or unparsable file, baseline
     or config error)
"""

import argparse
import os
import sys
from typing import List, Optional

from lintratchet import __version__
from lintratchet.config import load_ratchet_config, create_default_config, CONFIG_FILE_NAMES
from lintratchet.core.engine import RatchetEngine, RatchetResult
from lintratchet.exceptions import BaselineError, RatchetError
from lintratchet.formatters import CLIFormatter, get_formatter
from lintratchet.logging_config import setup_logging

EXIT_ERROR = 3
EXIT_INTERRUPTED = 130


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--baseline",
        help="Path to the baseline file (default: .therug.yaml)",
    )
    parser.add_argument(
        "-f", "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only log errors",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="lintratchet",
        description="Keep the number of suppressed lints from ever going up.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  lintratchet check src/lib.rs src/main.rs     # Compare against .therug.yaml
  UPDATE_ANYWAY=1 lintratchet check src/lib.rs # Accept new suppressions
  lintratchet count src/*.rs --format json     # Show suppression counts
  lintratchet init                             # Create config file
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Check command
    check_parser = subparsers.add_parser("check", help="Run the ratchet on changed files")
    check_parser.add_argument(
        "files",
        nargs="*",
        help="Changed files (non-Rust files are ignored)",
    )
    _add_common_options(check_parser)

    # Count command
    count_parser = subparsers.add_parser("count", help="Show suppression counts for files")
    count_parser.add_argument(
        "files",
        nargs="*",
        help="Files to count",
    )
    _add_common_options(count_parser)

    # Init command
    init_parser = subparsers.add_parser("init", help="Create a configuration file")
    init_parser.add_argument(
        "-f", "--force",
        action="store_true",
        help="Overwrite existing config file",
    )

    return parser


def _load_config(args: argparse.Namespace):
    config = load_ratchet_config(args.config)
    if args.baseline:
        config.baseline = args.baseline
    return config


def cmd_check(args: argparse.Namespace) -> int:
    """Execute the check command."""
    config = _load_config(args)
    engine = RatchetEngine(config)

    evaluation = engine.evaluate(args.files)
    try:
        result = engine.apply(evaluation)
    except BaselineError:
        # The verdict stands even though the baseline could not be rewritten.
        _report_result(args, engine, RatchetResult(
            verdict=evaluation.verdict,
            observed=evaluation.observed,
            baseline=evaluation.baseline,
            examined_files=evaluation.examined_files,
        ))
        raise

    _report_result(args, engine, result)
    return result.exit_code


def _report_result(args: argparse.Namespace, engine: RatchetEngine, result: RatchetResult) -> None:
    if args.format == "json":
        print(get_formatter("json").format_result(result, engine.store.location))
        return
    formatter = CLIFormatter(use_color=not args.no_color, verbose=args.verbose)
    output = formatter.format_result(result, engine.store.location, engine.config.override_env)
    if output:
        print(output, file=sys.stderr)


def cmd_count(args: argparse.Namespace) -> int:
    """Execute the count command."""
    config = _load_config(args)
    engine = RatchetEngine(config)

    ledger = engine.count(args.files)

    if args.format == "json":
        print(get_formatter("json").format_counts(ledger))
    else:
        formatter = CLIFormatter(use_color=not args.no_color, verbose=args.verbose)
        print(formatter.format_counts(ledger))
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    """Execute the init command."""
    config_file = CONFIG_FILE_NAMES[0]

    if os.path.exists(config_file) and not args.force:
        print(f"Configuration file {config_file} already exists.")
        print("Use --force to overwrite.")
        return 1

    content = create_default_config()

    with open(config_file, 'w', encoding="utf-8") as f:
        f.write(content)

    print(f"Created configuration file: {config_file}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command in ("check", "count"):
        setup_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        if args.command == "check":
            return cmd_check(args)
        elif args.command == "count":
            return cmd_count(args)
        elif args.command == "init":
            return cmd_init(args)
        else:
            parser.print_help()
            return 0

    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except RatchetError as e:
        print(f"Error: {e}", file=sys.stderr)
        if os.environ.get("DEBUG"):
            raise
        return EXIT_ERROR


def ratchet_main(argv: Optional[List[str]] = None) -> int:
    """Entry point for ``warning-ratchet FILE...``; same as ``lintratchet check``."""
    if argv is None:
        argv = sys.argv[1:]
    return main(["check", *argv])


if __name__ == "__main__":
    sys.exit(main())
