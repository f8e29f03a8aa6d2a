"""
Prompt template corpus.

Parsing of the Markdown template corpus and lexical template selection.
"""

from srebuddy.templates.corpus import parse_templates
from srebuddy.templates.matcher import DEFAULT_MATCH_THRESHOLD, score_template, select_template

__all__ = [
    "parse_templates",
    "DEFAULT_MATCH_THRESHOLD",
    "score_template",
    "select_template",
]
