"""Prompt composition for the downstream language model.

A prompt body comes from, in order of preference:
1. the best-matching template of the corpus
2. the built-in fallback prompt for the command (``resources/fallback/<command>.md``)
3. a generic SRE outline

Placeholders ``{target}``, ``{environment}``, ``{rawInput}`` (or
``{raw_input}``) and ``{type}`` are replaced literally, so other braces in a
body (JSON or YAML snippets) are left untouched.
"""

from pathlib import Path
from typing import Dict, Optional

from srebuddy.models import PromptTemplate, TaskDescriptor
from srebuddy.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TARGET = "infrastructure component"
UNSPECIFIED_ENVIRONMENT = "unspecified"

EXTERNAL_CONTEXT_SECTION = """## Additional Context from Internal Documentation

The following documentation has been retrieved from internal systems that may be relevant to this task:

{context}

Please use this internal documentation along with your general knowledge to provide the most accurate and organization-specific guidance. If the internal documentation conflicts with general best practices, prioritize the internal documentation as it reflects the organization's specific requirements and standards.

Make sure to reference specific documentation sections when applicable and highlight any organization-specific considerations."""


class FallbackPromptLoader:
    """Loader for the built-in fallback prompts, with custom directory override.

    Fallback prompts are ``<command>.md`` files. A file in the custom
    directory takes precedence over the built-in one of the same name.

    Attributes:
        fallback_dir: Path to the built-in fallback prompts
        custom_dir: Optional path to a directory of custom fallback prompts
        _cache: Cache of loaded prompts
    """

    def __init__(self, custom_dir: Optional[str] = None):
        """Initialize the fallback prompt loader.

        Args:
            custom_dir: Optional directory holding custom fallback prompts.
        """
        self.fallback_dir = Path(__file__).parent / "resources" / "fallback"
        self.custom_dir = Path(custom_dir) if custom_dir else None
        self._cache: Dict[str, Optional[str]] = {}

    def load(self, command: str) -> Optional[str]:
        """Load the fallback prompt for a command.

        Args:
            command: Command name, e.g. ``"deploy"``

        Returns:
            Prompt body, or None when the command has no fallback prompt
        """
        command = command.lower()
        if command in self._cache:
            return self._cache[command]

        content = None
        for directory in (self.custom_dir, self.fallback_dir):
            if directory is None:
                continue
            path = directory / f"{command}.md"
            if path.is_file():
                content = path.read_text(encoding="utf-8").strip()
                break

        self._cache[command] = content
        return content

    def list_commands(self) -> list[str]:
        """List the commands that have a fallback prompt."""
        commands = set()
        for directory in (self.fallback_dir, self.custom_dir):
            if directory and directory.exists():
                commands.update(file.stem for file in directory.glob("*.md"))
        return sorted(commands)


_fallback_loader: Optional[FallbackPromptLoader] = None


def get_fallback_loader() -> FallbackPromptLoader:
    """Get the global fallback prompt loader."""
    global _fallback_loader
    if _fallback_loader is None:
        _fallback_loader = FallbackPromptLoader()
    return _fallback_loader


def configure_fallback_loader(custom_dir: Optional[str] = None) -> None:
    """Configure the global fallback prompt loader with a custom directory."""
    global _fallback_loader
    _fallback_loader = FallbackPromptLoader(custom_dir=custom_dir)


def substitute_placeholders(body: str, descriptor: TaskDescriptor) -> str:
    """Replace every placeholder occurrence with the descriptor's values."""
    environment = descriptor.environment.value if descriptor.environment else UNSPECIFIED_ENVIRONMENT
    values = {
        "{target}": descriptor.target or DEFAULT_TARGET,
        "{environment}": environment,
        "{rawInput}": descriptor.raw_input,
        "{raw_input}": descriptor.raw_input,
        "{type}": descriptor.type.value,
    }
    for placeholder, value in values.items():
        body = body.replace(placeholder, value)
    return body


def build_generic_prompt(descriptor: TaskDescriptor, command: str) -> str:
    environment = descriptor.environment.value if descriptor.environment else UNSPECIFIED_ENVIRONMENT
    return f"""You are SreBuddy, an expert Site Reliability Engineer assistant.

Task: {command} {descriptor.target or DEFAULT_TARGET}
Environment: {environment}
Context: {descriptor.raw_input}

Please provide comprehensive SRE guidance that includes:
1. **Step-by-step instructions** with clear actions
2. **Best practices** for production environments
3. **Code examples** with proper syntax highlighting
4. **Validation steps** to ensure success
5. **Rollback procedures** for safety
6. **Monitoring considerations** for observability

Focus on practical, battle-tested solutions that follow SRE principles."""


def parameters_section(descriptor: TaskDescriptor) -> str:
    lines = ["Additional Context:"]
    lines.extend(f"- {key}: {value}" for key, value in descriptor.parameters.items())
    return "\n".join(lines)


def external_context_section(external_context: str) -> str:
    return EXTERNAL_CONTEXT_SECTION.replace("{context}", external_context)


def _decorate(body: str, descriptor: TaskDescriptor, external_context: Optional[str]) -> str:
    if descriptor.parameters:
        body = f"{body}\n\n{parameters_section(descriptor)}"
    if external_context and external_context.strip():
        body = f"{body}\n\n{external_context_section(external_context)}"
    return body


def compose_prompt(
    template: Optional[PromptTemplate],
    command: str,
    descriptor: TaskDescriptor,
    external_context: Optional[str] = None,
) -> str:
    """
    Compose the final prompt for a task.

    Composition never raises; an internal fault falls back to the generic
    prompt.

    Args:
        template: Matched template, or None when no template matched
        command: Command the prompt is for, e.g. ``"implement"``
        descriptor: Classified task
        external_context: Optional documentation text retrieved for the task

    Returns:
        Prompt string for the language model
    """
    try:
        if template is not None:
            logger.debug("prompt_from_template", command=command, example=template.examples[0])
            body = substitute_placeholders(template.prompt, descriptor)
        else:
            fallback = get_fallback_loader().load(command)
            if fallback:
                logger.debug("prompt_from_fallback", command=command)
                body = substitute_placeholders(fallback, descriptor)
            else:
                logger.warning("prompt_generic", command=command)
                body = build_generic_prompt(descriptor, command)
        return _decorate(body, descriptor, external_context)
    except Exception as e:
        logger.error("prompt_composition_failed", command=command, error=str(e))
        return build_generic_prompt(descriptor, command)
