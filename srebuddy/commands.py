"""
Slash commands available in the interactive chat.
"""
from rich.markdown import Markdown
from rich.table import Table
from rich.text import Text

from srebuddy import __version__
from srebuddy.enums import TaskType
from srebuddy.classifier import parse_task
from srebuddy.planning import generate_implementation_plan
from srebuddy.rendering import render_results


COMMANDS = {}

# Slash commands that select the prompt template command for a request.
TASK_COMMANDS = tuple(task_type.value for task_type in TaskType)


class Command:
    """
    Base class for commands.
    """
    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description

    def execute(self, console, *args, **kwargs):
        """
        Execute the command.
        """


class Help(Command):
    """
    Help command to display available commands.
    """
    def __init__(self):
        super().__init__("help", "Show this help message")

    def execute(self, console, *args, **kwargs):
        for command in COMMANDS.values():
            console.print(f"/{command.name} - {command.description}", markup=False)
        for task_command in TASK_COMMANDS:
            console.print(f"/{task_command} <request> - Build a {task_command} prompt", markup=False)


class Version(Command):
    """
    prints the current version of SreBuddy.
    """
    def __init__(self):
        super().__init__("version", "Show the current version of SreBuddy")

    def execute(self, console, *args, **kwargs):
        console.print(f"SreBuddy version: {__version__}")


class Templates(Command):
    """
    lists the templates currently defined in the prompt corpus.
    """
    def __init__(self):
        super().__init__("templates", "List the prompt templates in the corpus")

    def execute(self, console, *args, **kwargs):
        service = kwargs.get("service")
        templates = service.available_templates() if service else []
        if not templates:
            console.print("[yellow]No prompt templates found[/yellow]")
            return
        table = Table(title="Prompt Templates")
        table.add_column("Command", style="magenta")
        table.add_column("First example", style="green")
        table.add_column("Tags", style="cyan")
        for template in templates:
            table.add_row(template.command, Text(template.examples[0]), Text(", ".join(template.tags)))
        console.print(table)


class Plan(Command):
    """
    prints the implementation plan for a request.
    """
    def __init__(self):
        super().__init__("plan", "Show the implementation plan for a request")

    def execute(self, console, *args, **kwargs):
        request = kwargs.get("request", "")
        if not request.strip():
            console.print("[yellow]Usage: /plan <request>[/yellow]")
            return
        descriptor = parse_task(request)
        plan = generate_implementation_plan(descriptor)
        console.print(Markdown(render_results(descriptor, plan, kwargs.get("external_context", ""))))


COMMANDS["help"] = Help()
COMMANDS["version"] = Version()
COMMANDS["templates"] = Templates()
COMMANDS["plan"] = Plan()
