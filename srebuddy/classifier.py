"""Rule-based classification of free-text SRE requests.

Every resolver walks an ordered tuple of ``(label, pattern)`` pairs and
returns the label of the first pattern that matches. The order is a
tie-break: "monitor the kubernetes install" is a MONITOR task because the
monitor patterns are tested before the implement patterns.
"""

import re
from typing import Dict, Optional, Pattern, Sequence, Tuple, TypeVar

from srebuddy.enums import Environment, TaskType, Urgency
from srebuddy.models import TaskDescriptor
from srebuddy.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

UNKNOWN_TARGET = "unknown"

TASK_TYPE_PATTERNS: Tuple[Tuple[TaskType, Pattern[str]], ...] = (
    (TaskType.MONITOR, re.compile(r"monitor|monitoring|alert|alerting|dashboard", re.IGNORECASE)),
    (TaskType.IMPLEMENT, re.compile(r"implement|install|setup|add", re.IGNORECASE)),
    (TaskType.CONFIGURE, re.compile(r"configure|config|set\s+up|customize", re.IGNORECASE)),
    (TaskType.DEPLOY, re.compile(r"deploy|deployment|release|rollout", re.IGNORECASE)),
    (TaskType.DOCS, re.compile(r"doc|documentation|guide|help|reference", re.IGNORECASE)),
    (TaskType.TROUBLESHOOT, re.compile(r"troubleshoot|debug|issue|problem|fix", re.IGNORECASE)),
)

TOOL_PATTERNS: Tuple[Tuple[str, Pattern[str]], ...] = (
    ("dynatrace", re.compile(r"dynatrace|dt\s+agent|dynatrace\s+agent", re.IGNORECASE)),
    ("datadog", re.compile(r"datadog|dd\s+agent|datadog\s+agent", re.IGNORECASE)),
    ("prometheus", re.compile(r"prometheus|prom\s+monitoring|prometheus\s+monitoring", re.IGNORECASE)),
    ("grafana", re.compile(r"grafana|grafana\s+dashboard", re.IGNORECASE)),
    ("kubernetes", re.compile(r"k8s|kubernetes|kubectl|kube", re.IGNORECASE)),
    ("docker", re.compile(r"docker|container|containerize", re.IGNORECASE)),
    ("terraform", re.compile(r"terraform|tf\s+deploy|infrastructure\s+as\s+code", re.IGNORECASE)),
    ("ansible", re.compile(r"ansible|playbook|automation", re.IGNORECASE)),
    ("nginx", re.compile(r"nginx|reverse\s+proxy|load\s+balancer", re.IGNORECASE)),
    ("redis", re.compile(r"redis|cache|caching", re.IGNORECASE)),
    ("elasticsearch", re.compile(r"elasticsearch|elk\s+stack|elastic", re.IGNORECASE)),
    ("jenkins", re.compile(r"jenkins|ci/cd|pipeline", re.IGNORECASE)),
)

ENVIRONMENT_PATTERNS: Tuple[Tuple[Environment, Pattern[str]], ...] = (
    (Environment.PRODUCTION, re.compile(r"prod|production|live", re.IGNORECASE)),
    (Environment.STAGING, re.compile(r"staging|stage|uat", re.IGNORECASE)),
    (Environment.DEVELOPMENT, re.compile(r"dev|development|local", re.IGNORECASE)),
    (Environment.TESTING, re.compile(r"test|testing|qa", re.IGNORECASE)),
)

URGENCY_PATTERNS: Tuple[Tuple[Urgency, Pattern[str]], ...] = (
    (Urgency.HIGH, re.compile(r"urgent|critical|asap|immediately|high\s+priority", re.IGNORECASE)),
    (Urgency.MEDIUM, re.compile(r"soon|medium\s+priority|moderate", re.IGNORECASE)),
    (Urgency.LOW, re.compile(r"low\s+priority|when\s+possible|eventually", re.IGNORECASE)),
)

STOPWORDS = frozenset({"the", "and", "for", "with", "using", "on", "in", "at", "to", "from"})

# Each probe captures its value in whichever alternative matched.
PARAMETER_PATTERNS: Tuple[Tuple[str, Pattern[str]], ...] = (
    ("version", re.compile(r"version\s+([0-9.]+)|v([0-9.]+)", re.IGNORECASE)),
    ("port", re.compile(r"port\s+([0-9]+)|:([0-9]+)", re.IGNORECASE)),
    ("namespace", re.compile(r"namespace\s+([a-z0-9-]+)", re.IGNORECASE)),
)


def first_match(text: str, patterns: Sequence[Tuple[T, Pattern[str]]]) -> Optional[T]:
    """Return the label of the first pattern that matches ``text``."""
    for label, pattern in patterns:
        if pattern.search(text):
            return label
    return None


def extract_task_type(text: str) -> TaskType:
    return first_match(text, TASK_TYPE_PATTERNS) or TaskType.IMPLEMENT


def extract_target(text: str) -> str:
    """Resolve the tool or service a request is about.

    Known tools resolve to their canonical name. Anything else falls back to
    the first word that is longer than three characters and is not a
    stopword.
    """
    tool = first_match(text, TOOL_PATTERNS)
    if tool:
        return tool

    for word in text.lower().split():
        if len(word) > 3 and word not in STOPWORDS:
            return word
    return UNKNOWN_TARGET


def extract_parameters(text: str) -> Dict[str, str]:
    parameters: Dict[str, str] = {}
    for name, pattern in PARAMETER_PATTERNS:
        match = pattern.search(text)
        if match:
            value = next((group for group in match.groups() if group), None)
            if value:
                parameters[name] = value.lower() if name == "namespace" else value
    return parameters


def extract_environment(text: str) -> Optional[Environment]:
    return first_match(text, ENVIRONMENT_PATTERNS)


def extract_urgency(text: str) -> Optional[Urgency]:
    return first_match(text, URGENCY_PATTERNS)


def parse_task(text: str) -> TaskDescriptor:
    """
    Parse a free-text request into a task descriptor.

    Classification is case-insensitive and total: every string produces a
    descriptor, with IMPLEMENT and ``"unknown"`` as the defaults for type and
    target.

    Args:
        text: The request as typed by the user

    Returns:
        TaskDescriptor with the original text preserved in ``raw_input``

    Example:
        >>> task = parse_task("implement dynatrace agent in production kubernetes")
        >>> task.type, task.target, task.environment
        (<TaskType.IMPLEMENT: 'implement'>, 'dynatrace', <Environment.PRODUCTION: 'production'>)
    """
    text = text if isinstance(text, str) else ""
    descriptor = TaskDescriptor(
        type=extract_task_type(text),
        target=extract_target(text),
        parameters=extract_parameters(text),
        environment=extract_environment(text),
        urgency=extract_urgency(text),
        raw_input=text,
    )
    logger.debug(
        "task_parsed",
        type=descriptor.type.value,
        target=descriptor.target,
        parameters=descriptor.parameters,
        environment=descriptor.environment.value if descriptor.environment else None,
        urgency=descriptor.urgency.value if descriptor.urgency else None,
    )
    return descriptor


def resolve_command(descriptor: TaskDescriptor) -> str:
    """Template command to use for a descriptor when none is given."""
    return descriptor.type.value
