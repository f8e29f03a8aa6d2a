"""
Prompt service.

Glues corpus loading, template matching and prompt composition together.
The corpus file is read and reparsed on every request so edits to it are
picked up without a restart.
"""

from pathlib import Path
from typing import List, Optional, Union

from srebuddy.classifier import resolve_command
from srebuddy.config import Config
from srebuddy.models import PromptTemplate, TaskDescriptor
from srebuddy.prompts import build_generic_prompt, compose_prompt
from srebuddy.templates import DEFAULT_MATCH_THRESHOLD, parse_templates, select_template
from srebuddy.utils.logging import get_logger

logger = get_logger(__name__)


class CorpusLoadError(Exception):
    """Raised when the template corpus exists but cannot be read."""


class PromptService:
    """Builds prompts for classified tasks from the template corpus.

    Attributes:
        corpus_path: Path to the Markdown template corpus
        match_threshold: Minimum score a template must exceed to be used
    """

    def __init__(
        self,
        corpus_path: Optional[Union[str, Path]] = None,
        match_threshold: float = DEFAULT_MATCH_THRESHOLD,
    ):
        self.corpus_path = Path(corpus_path) if corpus_path else None
        self.match_threshold = match_threshold

    @classmethod
    def from_config(cls, config: Config) -> "PromptService":
        """Create a service from the loaded configuration."""
        return cls(**config.get_template_config())

    def read_corpus(self) -> Optional[str]:
        """
        Read the corpus text.

        Returns:
            Corpus text, or None when no corpus file is configured or present

        Raises:
            CorpusLoadError: If the file exists but cannot be read
        """
        if self.corpus_path is None or not self.corpus_path.is_file():
            logger.warning(
                "corpus_not_found",
                path=str(self.corpus_path) if self.corpus_path else None,
                hint="Create .github/copilot-instructions.md for custom prompts",
            )
            return None
        try:
            return self.corpus_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CorpusLoadError(f"Cannot read prompt corpus {self.corpus_path}: {e}") from e

    def available_templates(self) -> List[PromptTemplate]:
        """Parse the corpus and return every template it defines."""
        try:
            corpus = self.read_corpus()
        except CorpusLoadError as e:
            logger.warning("corpus_unreadable", error=str(e))
            return []
        templates = parse_templates(corpus)
        logger.info("templates_loaded", count=len(templates), path=str(self.corpus_path))
        return templates

    def get_prompt_for_task(
        self,
        descriptor: TaskDescriptor,
        command: Optional[str] = None,
        external_context: Optional[str] = None,
    ) -> str:
        """
        Build the prompt for a task.

        Args:
            descriptor: Classified task
            command: Template command, defaults to the task type
            external_context: Optional documentation text to embed

        Returns:
            Prompt string; the generic prompt if anything goes wrong
        """
        command = (command or resolve_command(descriptor)).lower()
        try:
            template = select_template(
                self.available_templates(), descriptor, command, threshold=self.match_threshold
            )
            return compose_prompt(template, command, descriptor, external_context)
        except Exception as e:
            logger.error("prompt_for_task_failed", command=command, error=str(e))
            return build_generic_prompt(descriptor, command)
