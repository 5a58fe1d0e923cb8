#!/usr/bin/env python3
"""
deptree-rdf CLI - Writes a project's dependency tree as RDF.

Usage:
    deptree-rdf --help
    deptree-rdf --tree dependency-tree.json --format n3
    deptree-rdf --project-dir ./my-app --format ntriples --output ./target/rdf
"""

import argparse
import logging
import sys
from pathlib import Path

import pyfiglet
from dotenv import load_dotenv

from deptree_rdf import __version__
from deptree_rdf.config.settings import DEFAULT_CONFIG_PATH, Settings, load_config
from deptree_rdf.errors import ExportError
from deptree_rdf.pipeline import Pipeline, PipelineResult
from deptree_rdf.utils.logging import setup_colored_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIGURATION = 1
EXIT_RESOLUTION = 2
EXIT_WRITE = 3
EXIT_VALIDATION = 4
EXIT_INTERRUPTED = 130

EXIT_CODES = {
    "configuration": EXIT_CONFIGURATION,
    "resolution": EXIT_RESOLUTION,
    "walk": EXIT_WRITE,
    "write": EXIT_WRITE,
}


def setup_logging(
    verbose: bool = False,
    debug: bool = False,
    default_level: str = "WARNING",
    log_file: Path | None = None,
) -> None:
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.getLevelName(default_level.upper())

    setup_colored_logging(level=level, log_file=log_file)


def print_banner() -> None:
    """Print the application banner."""
    print(pyfiglet.figlet_format("deptree-rdf", font="slant", width=100))
    print("Maven dependency trees as RDF".center(60, "*"))


def print_config_summary(settings: Settings) -> None:
    """Print configuration summary."""
    source = settings.source
    print("\n📋 Configuration:")
    print("─" * 40)
    if source.tree_file:
        print(f"  Tree file: {source.tree_file} ({source.tree_format})")
    else:
        print(f"  Maven project: {source.project_dir} ({source.maven_executable})")
    print(f"  Output dir: {settings.output.output_dir}")
    print(f"  Output format: {settings.output.format}")
    print(f"  Validation: {'on' if settings.output.validate_output else 'off'}")
    print("─" * 40)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="deptree-rdf",
        description="Write a resolved Maven dependency tree as RDF (XML, N3 or N-Triples)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert a tree written by `mvn dependency:tree -DoutputType=json -DoutputFile=tree.json`
  deptree-rdf --tree tree.json --format n3

  # Convert the plain text output of `mvn dependency:tree`
  deptree-rdf --tree tree.txt --format ntriples

  # Let Maven resolve the project in ./my-app, write RDF/XML to ./out
  deptree-rdf --project-dir ./my-app --output ./out
        """,
    )

    # Dependency source
    parser.add_argument(
        "--tree",
        "-t",
        type=str,
        default=None,
        help="Dependency tree file (JSON or text output of mvn dependency:tree)",
    )

    parser.add_argument(
        "--tree-format",
        type=str,
        choices=["auto", "json", "text"],
        default=None,
        help="Format of the tree file (default: auto, by extension)",
    )

    parser.add_argument(
        "--project-dir",
        "-p",
        type=str,
        default=None,
        help="Maven project to resolve when no tree file is given (default: .)",
    )

    # Output options
    parser.add_argument(
        "--format",
        "-f",
        type=str,
        default=None,
        help="Output format: xml, n3 or ntriples (default: from config, xml)",
    )

    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Output directory (default: ./target/dependencies-rdf)",
    )

    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=DEFAULT_CONFIG_PATH,
        help=f"YAML configuration file (default: {DEFAULT_CONFIG_PATH})",
    )

    parser.add_argument(
        "--skip-validation",
        action="store_true",
        help="Skip reading the written file back",
    )

    # Logging
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write the log to this file",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output (very verbose)",
    )

    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress all output except errors",
    )

    # Misc
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def apply_cli_overrides(settings: Settings, args: argparse.Namespace) -> None:
    """Apply CLI arguments to settings."""
    if args.tree:
        settings.source.tree_file = Path(args.tree)

    if args.tree_format:
        settings.source.tree_format = args.tree_format

    if args.project_dir:
        settings.source.project_dir = Path(args.project_dir)

    if args.format is not None:
        settings.output.format = args.format

    if args.output is not None:
        settings.output.output_dir = Path(args.output)

    if args.skip_validation:
        settings.output.validate_output = False

    if args.log_file:
        settings.logging.log_file = Path(args.log_file)


def exit_code_for(error: ExportError) -> int:
    """Map a failed stage to the process exit code."""
    return EXIT_CODES.get(error.stage, EXIT_WRITE)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    load_dotenv()

    parser = create_parser()
    args = parser.parse_args(argv)

    # Load and configure settings
    try:
        settings = load_config(args.config)
        apply_cli_overrides(settings, args)
    except Exception as e:
        print(f"❌ Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIGURATION

    # Setup logging
    setup_logging(
        verbose=args.verbose,
        debug=args.debug,
        default_level=settings.logging.level,
        log_file=settings.logging.log_file,
    )
    if args.quiet:
        logging.disable(logging.WARNING)

    if not args.quiet:
        print_banner()
        print_config_summary(settings)

    pipeline = Pipeline(settings=settings)

    try:
        result: PipelineResult = pipeline.execute()

    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user")
        return EXIT_INTERRUPTED

    except ExportError as e:
        if not args.quiet and e.result is not None:
            e.result.print_summary()
        print(f"\n❌ {e.stage.capitalize()} error: {e.message}", file=sys.stderr)
        return exit_code_for(e)

    if not args.quiet:
        result.print_summary()

    if result.validation_errors:
        for error in result.validation_errors:
            logger.error("Validation: %s", error)
        return EXIT_VALIDATION

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
