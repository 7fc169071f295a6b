from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .codegen.core.config import ConfigError, ConfigManager, load_config
from .codegen.core.diagnostics import DiagnosticSeverity
from .codegen.core.generator import EventGenerator, GenerationResult, generate_code
from .logging_config import get_logger, setup_logging
from .utils import DescriptorLoaderError, load_descriptors_from_file, write_sources

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


_SEVERITY_STYLES = {
    DiagnosticSeverity.ERROR: "red",
    DiagnosticSeverity.WARNING: "yellow",
    DiagnosticSeverity.INFO: "cyan",
    DiagnosticSeverity.HIDDEN: "dim",
}


def create_parser() -> argparse.ArgumentParser:
    """Build the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="eventgen",
        description="Generate change-notification members for annotated fields.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument("--log-file", metavar="FILE", help="Also write logs to FILE")

    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser(
        "generate", help="Generate sources from a descriptor snapshot"
    )
    generate.add_argument("input", metavar="SNAPSHOT", help="JSON descriptor snapshot")
    generate.add_argument(
        "--output",
        "-o",
        metavar="DIR",
        help="Directory for generated files (default: only report)",
    )
    generate.add_argument(
        "--config", metavar="FILE", help="JSON configuration file for generation"
    )
    generate.add_argument(
        "--no-attribute",
        action="store_true",
        help="Don't emit the marker attribute declaration",
    )
    generate.add_argument(
        "--show", action="store_true", help="Print the generated sources"
    )
    generate.add_argument(
        "--warnings-as-errors",
        action="store_true",
        help="Exit with status 1 if any warning is reported",
    )

    attribute = subparsers.add_parser(
        "attribute", help="Print the marker attribute declaration"
    )
    attribute.add_argument(
        "--config", metavar="FILE", help="JSON configuration file for generation"
    )

    return parser


class CLIHandler:
    """Handle command-line interface (CLI) operations for member generation."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize CLI handler.

        Args:
            console: Console for user-facing output.
        """
        self.console = console or Console()
        self.config_manager = ConfigManager()

    def run(self, args: Any) -> int:
        """Run the selected command.

        Args:
            args: Parsed CLI arguments.

        Returns:
            Exit code (0 for success, 1 for failure).
        """
        try:
            if args.command == "generate":
                return self._handle_generate(args)
            if args.command == "attribute":
                return self._handle_attribute(args)
            raise CLIError(f"Unknown command: {args.command}")
        except (CLIError, ConfigError, DescriptorLoaderError, FileNotFoundError) as e:
            self.console.print(f"❌ [red]{escape(str(e))}[/red]")
            logger.error("Command failed: %s", e)
            return 1

    def _load_config(self, args: Any, **overrides: Any):
        config = load_config(custom_config=overrides or None, config_file=args.config)
        for warning in self.config_manager.validate_config(config):
            self.console.print(f"⚠️  [yellow]{escape(warning)}[/yellow]")
            logger.warning("Configuration warning: %s", warning)
        return config

    def _handle_generate(self, args: Any) -> int:
        overrides = {"emit_attribute_source": False} if args.no_attribute else {}
        config = self._load_config(args, **overrides)

        source, fields = load_descriptors_from_file(args.input)
        self.console.print(f"📄 Loaded: {source} ({len(fields)} field(s))")

        result = generate_code(fields, config)
        if not result.success:
            self.console.print(f"❌ [red]{escape(result.error_message or '')}[/red]")
            return 1

        self._print_diagnostics(result)
        self._print_sources(result, show=args.show)

        if args.output:
            written = write_sources(result.sources, args.output)
            self.console.print(
                f"✅ [green]Wrote {len(written)} file(s) to {args.output}[/green]"
            )

        if args.warnings_as_errors and result.warnings:
            self.console.print(
                f"❌ [red]{len(result.warnings)} warning(s) treated as errors[/red]"
            )
            return 1

        return 0

    def _handle_attribute(self, args: Any) -> int:
        config = self._load_config(args)
        text = EventGenerator(config).render_attribute_source()
        self.console.print(Syntax(text, "csharp", theme="monokai"))
        return 0

    def _print_diagnostics(self, result: GenerationResult) -> None:
        if not result.diagnostics:
            return

        table = Table(title="Diagnostics", box=box.SIMPLE)
        table.add_column("Severity")
        table.add_column("Code")
        table.add_column("Location")
        table.add_column("Message")

        for diagnostic in result.diagnostics:
            style = _SEVERITY_STYLES[diagnostic.severity]
            table.add_row(
                f"[{style}]{diagnostic.severity.value}[/{style}]",
                diagnostic.code,
                escape(str(diagnostic.location)),
                escape(diagnostic.message),
            )

        self.console.print(table)

    def _print_sources(self, result: GenerationResult, show: bool) -> None:
        table = Table(title="Generated sources", box=box.SIMPLE)
        table.add_column("File")
        table.add_column("Lines", justify="right")

        for source in result.sources:
            table.add_row(source.file_name, str(len(source.text.splitlines())))

        self.console.print(table)

        if show:
            for source in result.sources:
                self.console.print(
                    Panel(
                        Syntax(source.text, "csharp", theme="monokai"),
                        title=source.file_name,
                    )
                )


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``eventgen`` command."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=args.log_file,
    )
    return CLIHandler().run(args)


if __name__ == "__main__":
    sys.exit(main())
