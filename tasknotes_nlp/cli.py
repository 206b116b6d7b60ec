"""Command-line interface for the task notes NLP parser.

Provides commands for:
- Parsing quick-entry text and previewing the result
- Listing languages and configured triggers
- Configuration management
- Running the API server
"""

import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tasknotes_nlp import __version__
from tasknotes_nlp.locales import available_languages, is_supported_language
from tasknotes_nlp.models.parsed_task import ParsedTaskData
from tasknotes_nlp.services.nlp_parser import NaturalLanguageParser
from tasknotes_nlp.services.preview_service import PreviewFormatter
from tasknotes_nlp.services.trigger_config_service import TriggerConfigService
from tasknotes_nlp.utils.config import load_config
from tasknotes_nlp.utils.logger import setup_logging

console = Console()


# --- Utility Functions ---


def _build_parser(ctx, language, reference_date, default_field) -> NaturalLanguageParser:
    """Create a parser from the loaded config and command line overrides."""
    overrides = {}
    if language:
        language = language.lower()
        if not is_supported_language(language):
            codes = ", ".join(code for code, _ in available_languages())
            console.print(f"[red]Unsupported language: {language}[/red]")
            console.print(f"[dim]Available: {codes}[/dim]")
            sys.exit(1)
        overrides["language_code"] = language
    if reference_date:
        overrides["reference_date"] = reference_date.date()
    if default_field:
        overrides["default_to_scheduled"] = default_field == "scheduled"
    return NaturalLanguageParser.from_config(ctx.obj["config"], **overrides)


def _result_table(parsed: ParsedTaskData) -> Table:
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for key, value in parsed.to_dict().items():
        if value in ([], {}):
            continue
        if isinstance(value, list):
            value = ", ".join(value)
        elif isinstance(value, dict):
            value = ", ".join(f"{k}={v}" for k, v in value.items())
        table.add_row(key, str(value))
    return table


parse_options = [
    click.option("--language", "-l", help="Language code (default: configured language)"),
    click.option("--reference-date", "-r", type=click.DateTime(formats=["%Y-%m-%d"]),
                 help="Resolve relative dates against this date (YYYY-MM-DD)"),
    click.option("--default", "default_field", type=click.Choice(["scheduled", "due"]),
                 help="Field for dates without a due/scheduled keyword"),
]


def with_parse_options(func):
    for option in reversed(parse_options):
        func = option(func)
    return func


# --- Main CLI Group ---


@click.group()
@click.version_option(version=__version__, prog_name="TaskNotes NLP")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to config file")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, config, verbose):
    """TaskNotes NLP - turn quick-entry text into task attributes.

    Use 'tasknlp <command> --help' for more information about a command.
    """
    ctx.ensure_object(dict)

    config_path = config if config else None
    ctx.obj["config"] = load_config(config_path)
    ctx.obj["config_path"] = config_path

    logging_config = ctx.obj["config"].logging
    setup_logging("DEBUG" if verbose else logging_config.level, logging_config.format)


# --- Parse Commands ---


@cli.command("parse")
@click.argument("text")
@with_parse_options
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def parse(ctx, text, language, reference_date, default_field, as_json):
    """Parse natural language text into task attributes.

    Examples:

        tasknlp parse "Buy milk tomorrow 3pm #errand @store"

        tasknlp parse "Weekly sync every monday 30min" --json

        tasknlp parse "Rapport fertig machen morgen" --language de
    """
    parser = _build_parser(ctx, language, reference_date, default_field)
    parsed = parser.parse(text)

    if as_json:
        click.echo(json.dumps(parsed.to_dict(), indent=2, ensure_ascii=False))
        return

    formatter = PreviewFormatter(ctx.obj["config"].user_fields)
    console.print(Panel(_result_table(parsed), title="Parsed Task", border_style="cyan"))
    console.print(formatter.get_preview_text(parsed))


@cli.command("preview")
@click.argument("text")
@with_parse_options
@click.pass_context
def preview(ctx, text, language, reference_date, default_field):
    """Show the one-line preview for some input text."""
    parser = _build_parser(ctx, language, reference_date, default_field)
    parsed = parser.parse(text)
    formatter = PreviewFormatter(ctx.obj["config"].user_fields)

    for part in formatter.get_preview_data(parsed):
        console.print(f"[dim]{part.icon:>15}[/dim]  {part.text}", highlight=False)


# --- Info Commands ---


@cli.command("languages")
def languages():
    """List supported languages."""
    table = Table(title="Supported Languages")
    table.add_column("Code", style="cyan")
    table.add_column("Name")

    for code, name in available_languages():
        table.add_row(code, name)

    console.print(table)


@cli.command("triggers")
@click.pass_context
def triggers(ctx):
    """Show configured property triggers."""
    cfg = ctx.obj["config"]
    service = TriggerConfigService(cfg.triggers, cfg.user_fields)

    table = Table(title="Property Triggers")
    table.add_column("Property", style="cyan")
    table.add_column("Trigger")
    table.add_column("Enabled")
    table.add_column("Suggester", style="dim")

    for trigger in cfg.triggers.triggers:
        enabled = "[green]yes[/green]" if trigger.enabled else "[dim]no[/dim]"
        table.add_row(
            trigger.property_id,
            trigger.trigger,
            enabled,
            service.get_suggester_type(trigger.property_id).value,
        )

    console.print(table)


# --- Config Commands ---


@cli.group()
def config():
    """Configuration commands."""
    pass


@config.command("show")
@click.pass_context
def config_show(ctx):
    """Show current configuration."""
    cfg = ctx.obj["config"]

    sections = [
        ("Parser", [
            f"Language: {cfg.nlp.language}",
            f"Default To Scheduled: {cfg.nlp.default_to_scheduled}",
            f"Forward Dates: {cfg.nlp.forward_date}",
        ]),
        ("Custom Values", [
            f"Statuses: {', '.join(s.value for s in cfg.statuses) or '[language defaults]'}",
            f"Priorities: {', '.join(p.value for p in cfg.priorities) or '[language defaults]'}",
            f"User Fields: {', '.join(f.id for f in cfg.user_fields) or '[none]'}",
        ]),
        ("Logging", [
            f"Level: {cfg.logging.level}",
        ]),
    ]

    for title, items in sections:
        console.print(f"\n[bold]{title}[/bold]")
        for item in items:
            console.print(f"  {item}", highlight=False)


@config.command("path")
@click.pass_context
def config_path(ctx):
    """Show config file path."""
    path = Path(ctx.obj.get("config_path") or "config.yaml")
    if path.exists():
        console.print(f"Config file: [cyan]{path.absolute()}[/cyan]")
    else:
        console.print("[dim]No config.yaml found. Using defaults.[/dim]")
        console.print("[dim]Create config.yaml to customize settings.[/dim]")


@config.command("init")
@click.option("--force", "-f", is_flag=True, help="Overwrite existing config")
def config_init(force):
    """Create a default config file."""
    config_path = Path("config.yaml")

    if config_path.exists() and not force:
        console.print("[yellow]config.yaml already exists. Use --force to overwrite.[/yellow]")
        return

    default_config = """# TaskNotes NLP Configuration
# Every setting can also be given as an environment variable,
# e.g. TASKNLP_NLP__LANGUAGE=de

# Parser settings
nlp:
  language: en                # en, de, es, fr, it, ja, nl, pt, sv, zh
  default_to_scheduled: true  # dates without due/scheduled keywords
  forward_date: true          # resolve "friday" to the next friday

# Property triggers
triggers:
  triggers:
    - property_id: tags
      trigger: "#"
    - property_id: contexts
      trigger: "@"
    - property_id: projects
      trigger: "+"
    - property_id: status
      trigger: "*"
    - property_id: priority
      trigger: "!"
      enabled: false

# Custom statuses and priorities (empty = language keywords)
statuses: []
priorities: []

# User-defined fields, each needs a trigger above
user_fields: []

# Logging
logging:
  level: WARNING
"""

    config_path.write_text(default_config)
    console.print(f"[green]✓[/green] Created {config_path}")
    console.print("[dim]Edit the file to configure your settings.[/dim]")


# --- Server Command ---


@cli.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to")
@click.option("--port", "-p", default=8000, help="Port to bind to")
@click.option("--reload", is_flag=True, help="Enable auto-reload (dev mode)")
def server(host, port, reload):
    """Start the API server."""
    import uvicorn

    console.print(Panel(
        f"Starting API server at [cyan]http://{host}:{port}[/cyan]\n"
        f"API docs at [cyan]http://{host}:{port}/docs[/cyan]",
        title="TaskNotes NLP API",
    ))

    uvicorn.run(
        "tasknotes_nlp.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )


# --- Entry Point ---


def main():
    """Main entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
