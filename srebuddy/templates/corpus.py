"""Parser for the Markdown prompt template corpus.

The corpus is a Markdown document (by default
``.github/copilot-instructions.md``) made of top-level ``## `` sections.
A section becomes a template when its header names a command, e.g.::

    ## SRE Implement Prompts

    ### Examples
    - implement dynatrace agent in kubernetes

    ### Prompt
    You are an SRE assistant. Implement {target} in {environment}.

    ### Tags
    - dynatrace

Subsection headers may also be written in bold (``**Examples**``).
"""

import re
from enum import Enum
from typing import List, Optional, Pattern, Tuple

from srebuddy.models import PromptTemplate
from srebuddy.utils.logging import get_logger

logger = get_logger(__name__)

SECTION_SPLIT = re.compile(r"^## ", re.MULTILINE)

# Tested in order; the first alternative that matches names the command.
HEADER_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"SRE (\w+) Prompts?", re.IGNORECASE),
    re.compile(r"Prompt Templates? for (\w+)", re.IGNORECASE),
    re.compile(r"LLM (\w+) Instructions?", re.IGNORECASE),
)

BULLET = "-"


class _Subsection(Enum):
    NONE = "none"
    EXAMPLES = "examples"
    PROMPT = "prompt"
    TAGS = "tags"


SUBSECTION_HEADERS: Tuple[Tuple[_Subsection, Tuple[str, ...]], ...] = (
    (_Subsection.EXAMPLES, ("### Examples", "**Examples")),
    (_Subsection.PROMPT, ("### Prompt", "**Prompt")),
    (_Subsection.TAGS, ("### Tags", "**Tags")),
)


def extract_command(header: str) -> Optional[str]:
    """Return the lower-cased command named by a section header, if any."""
    for pattern in HEADER_PATTERNS:
        match = pattern.search(header)
        if match:
            return match.group(1).lower()
    return None


def _subsection_for(line: str) -> Optional[_Subsection]:
    for subsection, prefixes in SUBSECTION_HEADERS:
        if line.startswith(prefixes):
            return subsection
    return None


def parse_section(section: str) -> Optional[PromptTemplate]:
    """
    Parse one ``## `` section into a prompt template.

    Args:
        section: Section text, without the leading ``## `` marker

    Returns:
        PromptTemplate, or None when the header names no command or the
        section lacks examples or a prompt body
    """
    lines = section.split("\n")
    command = extract_command(lines[0].strip())
    if command is None:
        return None

    examples: List[str] = []
    tags: List[str] = []
    body: List[str] = []
    current = _Subsection.NONE

    for raw_line in lines[1:]:
        line = raw_line.strip()

        subsection = _subsection_for(line)
        if subsection is not None:
            current = subsection
            continue

        if current == _Subsection.EXAMPLES and line.startswith(BULLET):
            examples.append(line[len(BULLET):].strip())
        elif current == _Subsection.PROMPT and line:
            body.append(line)
        elif current == _Subsection.TAGS and line.startswith(BULLET):
            tag = line[len(BULLET):].strip()
            if tag not in tags:
                tags.append(tag)

    prompt = "\n".join(body).strip()
    if not examples or not prompt:
        logger.debug("section_dropped", command=command, examples=len(examples), has_prompt=bool(prompt))
        return None

    return PromptTemplate(command=command, examples=tuple(examples), tags=tuple(tags), prompt=prompt)


def parse_templates(corpus: Optional[str]) -> List[PromptTemplate]:
    """
    Parse every prompt template in a corpus, in document order.

    Parsing never raises: a missing or malformed corpus yields an empty list.

    Args:
        corpus: Full corpus text, or None when no corpus is available

    Returns:
        List of PromptTemplate objects
    """
    if not isinstance(corpus, str) or not corpus.strip():
        return []

    try:
        templates = []
        for section in SECTION_SPLIT.split(corpus):
            if not section.strip():
                continue
            template = parse_section(section)
            if template is not None:
                templates.append(template)
    except Exception as e:
        logger.warning("corpus_parse_failed", error=str(e))
        return []

    logger.debug("corpus_parsed", templates=len(templates))
    return templates
