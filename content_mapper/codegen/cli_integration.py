"""
CLI integration for code generation functionality.

Provides the ``generate``, ``languages`` and ``info`` subcommands.
"""

import argparse
from pathlib import Path
from typing import Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.syntax import Syntax
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from .registry import (
    get_generator,
    get_language_info,
    get_registry,
    is_language_supported,
    list_all_language_info,
    list_supported_languages,
)
from .core.config import ConfigError, GeneratorConfig, get_config_manager, load_config
from .core.generator import CodeGenerator, GenerationResult, generate_code
from .core.schema import ContentTypeSchema, SchemaError, parse_content_types
from ..logging_config import get_logger
from ..utils import JSONLoaderError, load_content_types, load_json_from_stream

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def add_codegen_subparsers(subparsers):
    """Register the code generation subcommands on a subparser group."""
    create_generate_subparser(subparsers)

    languages_parser = subparsers.add_parser(
        "languages", help="List supported target languages"
    )
    languages_parser.set_defaults(func=lambda args: _list_languages())

    info_parser = subparsers.add_parser(
        "info", help="Show detailed information about a target language"
    )
    info_parser.add_argument("language", help="Language name or alias")
    info_parser.set_defaults(func=lambda args: _show_language_info(args.language))


def create_generate_subparser(subparsers) -> argparse.ArgumentParser:
    """
    Create the ``generate`` subcommand parser.

    Args:
        subparsers: Subparser group from main parser

    Returns:
        Configured subparser for the generate command
    """
    parser = subparsers.add_parser(
        "generate",
        help="Generate mapper classes from content type definitions",
        description="Generate one mapper class per content type in a schema document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  content-mapper generate content_types.json
  content-mapper generate -l php --namespace App.Entry -o src/Mapper content_types.json
  content-mapper generate --only blogPost --stdin < content_types.json
        """.strip(),
    )

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="Content type document (JSON)")
    input_group.add_argument("--url", help="URL to fetch the document from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read the document from standard input"
    )

    # Core generation options
    parser.add_argument(
        "--language",
        "-l",
        default="python",
        help="Target language for code generation (default: python)",
    )

    parser.add_argument(
        "--output", "-o", metavar="DIR", help="Output directory (default: stdout)"
    )

    parser.add_argument("--config", help="Configuration file path (JSON)")

    parser.add_argument("--namespace", help="Namespace of the resource classes")

    parser.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't add comments to generated code",
    )

    parser.add_argument(
        "--only",
        metavar="ID",
        action="append",
        help="Only generate the mapper for this content type id (repeatable)",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show generation result metadata",
    )

    parser.set_defaults(func=handle_generate_command)
    return parser


def handle_generate_command(args: argparse.Namespace) -> int:
    """
    Handle the generate subcommand.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        if not (args.file or args.url or args.stdin):
            console.print(
                "[red]✗[/red] Input source required (file, --url, or --stdin)"
            )
            return 1

        if not _validate_language(args.language):
            return 1

        schemas = _select_schemas(_get_input_schemas(args), args.only)
        config = _build_config(args)
        generator = get_generator(args.language, config)
        if generator.config.output_dir:
            _check_file_names(schemas, generator)

        return _generate_and_output(schemas, generator, args)

    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1
    except Exception as e:
        logger.debug("Generation failed", exc_info=True)
        console.print(f"[red]✗ Unexpected error:[/red] {e}")
        return 1


def _list_languages() -> int:
    """List supported languages with details."""
    language_info = list_all_language_info()

    if not language_info:
        console.print("[yellow]⚠️ No code generators available[/yellow]")
        return 0

    table = Table(
        title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan"
    )

    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for lang_name, info in sorted(language_info.items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(lang_name, info["file_extension"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print()

    console.print(
        Panel(
            "[bold]Usage:[/bold] content-mapper generate -l [cyan]LANGUAGE[/cyan] [dim]content_types.json[/dim]\n"
            "[bold]Info:[/bold] content-mapper info [cyan]LANGUAGE[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )

    return 0


def _show_language_info(language: str) -> int:
    """Show detailed information about a specific language."""
    if not _validate_language(language, silent=True):
        console.print(f"[red]✗ Language '{language}' is not supported[/red]")
        console.print("[dim]Use 'content-mapper languages' to see available options[/dim]")
        return 1

    info = get_language_info(language)

    info_text = f"""[bold]Language:[/bold] {info['name']}
[bold]File Extension:[/bold] {info['file_extension']}
[bold]Generator Class:[/bold] {info['class']}
[bold]Module:[/bold] {info['module']}"""

    if info["aliases"]:
        info_text += f"\n[bold]Aliases:[/bold] {', '.join(info['aliases'])}"

    console.print()
    console.print(
        Panel(
            info_text,
            title=f"🔧 {info['name'].title()} Generator",
            border_style="green",
        )
    )

    config_table = Table(
        title="⚙️  Default Configuration",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )

    config_table.add_column("Setting", style="bold")
    config_table.add_column("Value", style="green")

    config_table.add_row("Namespace", info["namespace"])
    for key, qualified_name in info["runtime_types"].items():
        config_table.add_row(key.replace("_", " ").title(), qualified_name)

    console.print()
    console.print(config_table)

    examples_text = f"""Print mappers:
[cyan]content-mapper generate -l {language} content_types.json[/cyan]

Write one file per content type:
[cyan]content-mapper generate -l {language} -o mappers content_types.json[/cyan]

Custom namespace:
[cyan]content-mapper generate -l {language} --namespace {info['namespace']} content_types.json[/cyan]"""

    console.print()
    console.print(Panel(examples_text, title="💡 Usage Examples", border_style="blue"))

    return 0


def _validate_language(language: str, silent: bool = False) -> bool:
    """Validate that a language or alias is supported."""
    if not is_language_supported(language):
        if not silent:
            supported = list_supported_languages()
            console.print(f"[red]✗ Unsupported language '{language}'[/red]")
            console.print(f"[dim]Supported languages: {', '.join(supported)}[/dim]")
        return False
    return True


def _get_input_schemas(args: argparse.Namespace) -> List[ContentTypeSchema]:
    """Load and parse the content type document named by the arguments."""
    try:
        if args.stdin:
            source, data = load_json_from_stream()
            schemas = parse_content_types(data)
        else:
            source, schemas = load_content_types(file_path=args.file, url=args.url)
    except (JSONLoaderError, SchemaError, FileNotFoundError) as e:
        raise CLIError(f"Failed to load input: {e}") from e

    console.print(f"📄 Loaded {len(schemas)} content type(s) from {source}", style="dim")
    return schemas


def _select_schemas(
    schemas: List[ContentTypeSchema], only: Optional[List[str]]
) -> List[ContentTypeSchema]:
    """Restrict schemas to the ids given with ``--only``, keeping document order."""
    if not only:
        return schemas

    known = {schema.id for schema in schemas}
    missing = [content_type_id for content_type_id in only if content_type_id not in known]
    if missing:
        raise CLIError(f"Content type(s) not found: {', '.join(missing)}")

    return [schema for schema in schemas if schema.id in only]


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from CLI arguments."""
    config_dict = {}

    if args.namespace:
        config_dict["namespace"] = args.namespace

    if args.no_comments:
        config_dict["add_comments"] = False

    if args.output:
        config_dict["output_dir"] = args.output

    language = get_registry().resolve(args.language)
    try:
        config = load_config(language, custom_config=config_dict, config_file=args.config)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e

    for warning in get_config_manager().validate_config(config, language):
        console.print(f"[yellow]⚠️  Configuration:[/yellow] {warning}")
    return config


def _check_file_names(schemas: List[ContentTypeSchema], generator: CodeGenerator):
    """Refuse to write two content types to the same file."""
    owners: Dict[str, str] = {}
    for schema in schemas:
        file_name = generator.get_file_name(schema)
        if file_name in owners:
            raise CLIError(
                f"Content types '{owners[file_name]}' and '{schema.id}' "
                f"would both be written to {file_name}"
            )
        owners[file_name] = schema.id


def _generate_and_output(
    schemas: List[ContentTypeSchema], generator: CodeGenerator, args: argparse.Namespace
) -> int:
    """Generate every mapper and handle output with rich formatting."""
    results: List[GenerationResult] = []

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        gen_task = progress.add_task(
            f"[green]Generating {generator.language_name} mappers...", total=None
        )
        for schema in schemas:
            results.append(generate_code(generator, schema))
        progress.remove_task(gen_task)

    exit_code = 0
    for schema, result in zip(schemas, results):
        if not result.success:
            console.print(
                f"[red]✗ Code generation failed for {schema.id}:[/red] {result.error_message}"
            )
            exit_code = 1
            continue

        if generator.config.output_dir:
            if not _write_output(generator, schema, result):
                exit_code = 1
                continue
        else:
            _print_code(generator, result)

        if args.verbose and result.metadata:
            _print_metadata(result)

        if result.warnings:
            console.print("\n[yellow]⚠️  Warnings:[/yellow]")
            for warning in result.warnings:
                console.print(f"  [yellow]•[/yellow] {warning}")
            console.print()

    return exit_code


def _write_output(
    generator: CodeGenerator, schema: ContentTypeSchema, result: GenerationResult
) -> bool:
    output_path = Path(generator.config.output_dir) / generator.get_file_name(schema)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(result.code, encoding="utf-8")
    except OSError as e:
        console.print(f"[red]✗ Failed to write to {output_path}:[/red] {e}")
        return False

    console.print(
        f"[green]✓[/green] {result.metadata['class_name']} saved to [cyan]{output_path}[/cyan]"
    )
    return True


def _print_code(generator: CodeGenerator, result: GenerationResult):
    border = "═" * 20
    console.print(
        f"[green]{border} 📄 {result.metadata['file_name']} {border}[/green]\n"
    )
    console.print(Syntax(result.code, generator.language_name, theme="monokai"))
    console.print()


def _print_metadata(result: GenerationResult):
    metadata_table = Table(
        title="📊 Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )

    metadata_table.add_column("Property", style="bold")
    metadata_table.add_column("Value", style="green")

    for key, value in result.metadata.items():
        metadata_table.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(metadata_table)
