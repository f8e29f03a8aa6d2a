"""Lexical matching of task descriptors against prompt templates.

Matching is token overlap only. For every example of a template the
coverage score counts example tokens that contain, or are contained in,
some token of ``"<raw_input> <target>"``, divided by the larger of the two
token counts. Every tag found in the task text adds a flat 0.5 bonus. The
template score is the sum of coverages and bonuses divided by the number of
examples, so a template with few examples and many matching tags can score
above 1.0.
"""

from typing import List, Optional, Sequence

from srebuddy.models import PromptTemplate, TaskDescriptor
from srebuddy.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MATCH_THRESHOLD = 0.3
TAG_BONUS = 0.5


def task_text(descriptor: TaskDescriptor) -> str:
    return f"{descriptor.raw_input} {descriptor.target}".lower()


def coverage_score(example: str, task_tokens: List[str]) -> float:
    """Bidirectional containment overlap between an example and the task tokens."""
    example_tokens = example.lower().split()
    denominator = max(len(example_tokens), len(task_tokens))
    if denominator == 0:
        return 0.0

    matching = 0
    for word in example_tokens:
        if any(token in word or word in token for token in task_tokens):
            matching += 1
    return matching / denominator


def score_template(descriptor: TaskDescriptor, template: PromptTemplate) -> float:
    """
    Score how well a template fits a task.

    Args:
        descriptor: Classified task
        template: Candidate template

    Returns:
        Similarity score; 0.0 for a template without examples
    """
    if not template.examples:
        return 0.0

    text = task_text(descriptor)
    task_tokens = text.split()

    total = sum(coverage_score(example, task_tokens) for example in template.examples)
    total += sum(TAG_BONUS for tag in template.tags if tag.lower() in text)

    return total / len(template.examples)


def select_template(
    templates: Sequence[PromptTemplate],
    descriptor: TaskDescriptor,
    command: str,
    threshold: float = DEFAULT_MATCH_THRESHOLD,
) -> Optional[PromptTemplate]:
    """
    Select the best template for a task among the templates of one command.

    Ties keep the template that appears first in the corpus.

    Args:
        templates: Parsed corpus, in document order
        descriptor: Classified task
        command: Command whose templates are eligible
        threshold: The best score must exceed this value

    Returns:
        The best template, or None when no template scores above threshold
    """
    command = command.lower()
    candidates = [template for template in templates if template.command.lower() == command]
    if not candidates:
        logger.debug("no_templates_for_command", command=command)
        return None

    best: Optional[PromptTemplate] = None
    best_score = 0.0
    for template in candidates:
        score = score_template(descriptor, template)
        if score > best_score:
            best, best_score = template, score

    if best is None or best_score <= threshold:
        logger.debug("no_template_above_threshold", command=command, best_score=best_score)
        return None

    logger.debug("template_selected", command=command, score=best_score, example=best.examples[0])
    return best
