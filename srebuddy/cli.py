"""
Command-line interface for SreBuddy.

Main entry point for the SreBuddy CLI application.
"""
import json
import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
import yaml
from pydantic import ValidationError
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from srebuddy import __version__
from srebuddy.classifier import parse_task, resolve_command
from srebuddy.commands import COMMANDS, TASK_COMMANDS
from srebuddy.config import Config, load_config
from srebuddy.console import get_console_wrapper
from srebuddy.docs import build_search_queries, load_external_context
from srebuddy.models import TaskDescriptor
from srebuddy.planning import assess_risk, generate_implementation_plan
from srebuddy.prompts import configure_fallback_loader
from srebuddy.rendering import render_results, risk_badge
from srebuddy.service import PromptService
from srebuddy.templates import score_template
from srebuddy.utils.logging import configure_logging, level_from_name


class OutputFormat(str, Enum):
    """Output formats for the parse command."""
    TEXT = "text"
    JSON = "json"
    YAML = "yaml"


app = typer.Typer(
    name="srebuddy",
    help="AI-powered assistant for SRE tasks",
    add_completion=False,
)

console = get_console_wrapper().get_console()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log classification and matching decisions"),
) -> None:
    """Configure logging before any command runs."""
    try:
        config = load_config()
    except ValidationError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(1)
    level = logging.DEBUG if verbose else level_from_name(config.log_level)
    configure_logging(level)


def _descriptor_as_dict(descriptor: TaskDescriptor) -> dict:
    return descriptor.model_dump(mode="json")


def _print_descriptor(descriptor: TaskDescriptor) -> None:
    table = Table(title="Parsed Task")
    table.add_column("Field", style="magenta")
    table.add_column("Value", style="green")
    table.add_row("Type", descriptor.type.value)
    table.add_row("Target", Text(descriptor.target))
    table.add_row("Environment", descriptor.environment.value if descriptor.environment else "Not specified")
    table.add_row("Urgency", descriptor.urgency.value if descriptor.urgency else "Not specified")
    table.add_row("Risk Level", risk_badge(assess_risk(descriptor)))
    for key, value in descriptor.parameters.items():
        table.add_row(f"Parameter: {key}", Text(value))
    console.print(table)


def _build_service(config: Config, corpus: Optional[Path]) -> PromptService:
    configure_fallback_loader(config.fallback_prompts_dir)
    service = PromptService.from_config(config)
    if corpus is not None:
        service.corpus_path = corpus
    return service


def _default_results_path(config: Config, descriptor: TaskDescriptor) -> Optional[Path]:
    if not config.results_dir:
        return None
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    return Path(config.results_dir).expanduser() / f"srebuddy-{descriptor.type.value}-{timestamp}.md"


@app.command()
def version() -> None:
    """Display the version of SreBuddy."""
    typer.echo(f"SreBuddy version {__version__}")


@app.command()
def parse(
    request: str = typer.Argument(..., help="Free-text SRE request"),
    output_format: OutputFormat = typer.Option(OutputFormat.TEXT, "--format", "-f", help="Output format"),
) -> None:
    """Classify a request into a structured task."""
    descriptor = parse_task(request)

    if output_format == OutputFormat.JSON:
        typer.echo(json.dumps(_descriptor_as_dict(descriptor), indent=2))
    elif output_format == OutputFormat.YAML:
        typer.echo(yaml.safe_dump(_descriptor_as_dict(descriptor), sort_keys=False).rstrip())
    else:
        _print_descriptor(descriptor)


@app.command()
def plan(
    request: str = typer.Argument(..., help="Free-text SRE request"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the results document to this file"),
    docs: Optional[List[Path]] = typer.Option(None, "--docs", "-d", help="Documentation file to include"),
    render: bool = typer.Option(False, "--render", help="Render the document as Markdown in the terminal"),
) -> None:
    """Generate an implementation plan for a request."""
    config = load_config()
    descriptor = parse_task(request)
    implementation_plan = generate_implementation_plan(descriptor)
    document = render_results(descriptor, implementation_plan, load_external_context(docs or []))

    output = output or _default_results_path(config, descriptor)
    if output is None:
        if render:
            console.print(Markdown(document))
        else:
            typer.echo(document)
        return

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(document, encoding="utf-8")
    except OSError as e:
        typer.echo(f"Error writing results to {output}: {e}", err=True)
        raise typer.Exit(1)
    console.print(f"[green]Results saved to {output}[/green]")


@app.command()
def prompt(
    request: str = typer.Argument(..., help="Free-text SRE request"),
    command: Optional[str] = typer.Option(None, "--command", "-c", help="Template command, defaults to the task type"),
    corpus: Optional[Path] = typer.Option(None, "--corpus", help="Prompt template corpus file"),
    docs: Optional[List[Path]] = typer.Option(None, "--docs", "-d", help="Documentation file to embed as context"),
) -> None:
    """Build the language model prompt for a request."""
    config = load_config()
    service = _build_service(config, corpus)
    descriptor = parse_task(request)
    external_context = load_external_context(docs or [])
    typer.echo(service.get_prompt_for_task(descriptor, command, external_context))


@app.command()
def templates(
    corpus: Optional[Path] = typer.Option(None, "--corpus", help="Prompt template corpus file"),
    command: Optional[str] = typer.Option(None, "--command", "-c", help="Only list templates for this command"),
    request: Optional[str] = typer.Option(None, "--request", "-r", help="Score templates against this request"),
) -> None:
    """List the prompt templates defined in the corpus."""
    config = load_config()
    service = _build_service(config, corpus)
    available = service.available_templates()
    if command:
        available = [template for template in available if template.command == command.lower()]

    if not available:
        console.print("[yellow]No prompt templates found[/yellow]")
        return

    descriptor = parse_task(request) if request else None

    table = Table(title="Prompt Templates")
    table.add_column("Command", style="magenta")
    table.add_column("Examples", style="green")
    table.add_column("Tags", style="cyan")
    if descriptor:
        table.add_column("Score", style="yellow")

    for template in available:
        row = [template.command, Text("\n".join(template.examples)), Text(", ".join(template.tags))]
        if descriptor:
            row.append(f"{score_template(descriptor, template):.2f}")
        table.add_row(*row)

    console.print(table)


@app.command()
def queries(
    request: str = typer.Argument(..., help="Free-text SRE request"),
) -> None:
    """Show the documentation search queries for a request."""
    for query in build_search_queries(parse_task(request)):
        typer.echo(query)


@app.command()
def chat(
    corpus: Optional[Path] = typer.Option(None, "--corpus", help="Prompt template corpus file"),
    docs: Optional[List[Path]] = typer.Option(None, "--docs", "-d", help="Documentation file to embed as context"),
) -> None:
    """Start an interactive session that turns requests into prompts."""
    config = load_config()
    service = _build_service(config, corpus)
    external_context = load_external_context(docs or [])

    console.print("[i cyan]Describe an SRE task or type 'exit' to end the session. Type '/help' for help.[/i cyan]")
    while True:
        try:
            user_input = Prompt.ask("\n[bold green]👤 YOU[/bold green]", console=console)
        except (EOFError, KeyboardInterrupt):
            break

        if user_input.strip().lower() in ("exit", "quit"):
            break

        command = None
        request = user_input.strip()
        if request.startswith("/"):
            name, _, request = request[1:].partition(" ")
            name = name.lower()
            if name in COMMANDS:
                COMMANDS[name].execute(console, request=request, service=service, external_context=external_context)
                continue
            if name not in TASK_COMMANDS:
                console.print(f"[red]Unknown command: /{escape(name)}[/red]")
                continue
            command = name

        if not request:
            continue

        descriptor = parse_task(request)
        command = command or resolve_command(descriptor)
        console.print(
            f"\n[bold cyan]🤖 SreBuddy[/bold cyan] [dim]{command} {escape(descriptor.target)} | "
            f"Environment: {descriptor.environment.value if descriptor.environment else 'Not specified'} | "
            f"Risk Level: {risk_badge(assess_risk(descriptor))}[/dim]"
        )
        console.print(Panel(Text(service.get_prompt_for_task(descriptor, command, external_context)), title="Prompt"))

    console.print("\n[cyan]Ending the SreBuddy session.[/cyan]\n")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
