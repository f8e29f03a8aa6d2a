"""
Documentation helpers.

Builds documentation search queries for a task and turns documentation
records returned by an external source into the text block that
``compose_prompt`` embeds as external context.
"""

import json
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Sequence, Union

import yaml

from srebuddy.models import DocumentationRecord, TaskDescriptor
from srebuddy.utils.logging import get_logger

logger = get_logger(__name__)

QUERY_SUFFIXES = ("implementation", "configuration", "deployment", "best practices")
RECORD_YAML_SUFFIXES = (".yaml", ".yml")


def build_search_queries(descriptor: TaskDescriptor) -> List[str]:
    """
    Build the documentation search queries for a task.

    Example:
        >>> from srebuddy.enums import TaskType
        >>> build_search_queries(TaskDescriptor(type=TaskType.DEPLOY, target="redis"))[:2]
        ['redis deploy', 'redis implementation']
    """
    queries = [f"{descriptor.target} {descriptor.type.value}"]
    queries.extend(f"{descriptor.target} {suffix}" for suffix in QUERY_SUFFIXES)
    return queries


def _as_records(
    data: Union[None, DocumentationRecord, Mapping[str, Any], Sequence[Any]]
) -> List[DocumentationRecord]:
    if not data:
        return []
    if isinstance(data, (DocumentationRecord, Mapping)):
        data = [data]
    elif isinstance(data, str) or not isinstance(data, Sequence):
        logger.debug("documentation_records_skipped", kind=type(data).__name__)
        return []

    records = []
    for item in data:
        if isinstance(item, DocumentationRecord):
            records.append(item)
        elif isinstance(item, Mapping):
            records.append(DocumentationRecord.model_validate(item))
        else:
            logger.debug("documentation_record_skipped", kind=type(item).__name__)
    return records


def format_documentation_results(
    data: Union[None, DocumentationRecord, Mapping[str, Any], Sequence[Any]]
) -> str:
    """
    Format documentation records as Markdown.

    Accepts a single record or a list of records, either as
    DocumentationRecord objects or as plain mappings with ``title``,
    ``content``, ``summary`` and ``url`` keys.

    Args:
        data: Documentation records

    Returns:
        Markdown text, or an empty string when there is nothing to format
    """
    formatted = ""
    for record in _as_records(data):
        if record.title:
            formatted += f"### {record.title}\n\n"
        body = record.content or record.summary
        if body:
            formatted += f"{body}\n\n"
        if record.url:
            formatted += f"[View Documentation]({record.url})\n\n"
        formatted += "---\n\n"
    return formatted.strip()


def _read_documentation_file(path: Path) -> str:
    """Text of a documentation file; record files are rendered to Markdown."""
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    if suffix == ".json":
        return format_documentation_results(json.loads(text))
    if suffix in RECORD_YAML_SUFFIXES:
        return format_documentation_results(yaml.safe_load(text))
    return text


def load_external_context(paths: Iterable[Union[str, Path]]) -> str:
    """
    Read documentation files and join them into one external context block.

    Plain text and Markdown files are used as they are. ``.json``, ``.yaml``
    and ``.yml`` files hold documentation records (a single record or a list
    of records) and go through ``format_documentation_results``.

    Missing, unreadable or malformed files are skipped with a warning.

    Args:
        paths: Documentation files

    Returns:
        Joined file contents, or an empty string
    """
    blocks = []
    for path in paths:
        path = Path(path)
        try:
            text = _read_documentation_file(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("documentation_file_unreadable", path=str(path), error=str(e))
            continue
        except (ValueError, yaml.YAMLError) as e:
            logger.warning("documentation_file_malformed", path=str(path), error=str(e))
            continue
        if text.strip():
            blocks.append(text.strip())
    return "\n\n".join(blocks)
