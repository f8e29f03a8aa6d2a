"""Implementation plan synthesis for classified SRE tasks."""

from typing import Dict, List

from srebuddy.enums import Complexity, Environment, RiskLevel, Urgency
from srebuddy.models import ImplementationPlan, TaskDescriptor
from srebuddy.planning.steps import get_step_generator
from srebuddy.utils.logging import get_logger

logger = get_logger(__name__)

COMPLEX_TOOLS = frozenset({"kubernetes", "prometheus", "elasticsearch"})

TIME_ESTIMATES: Dict[Complexity, str] = {
    Complexity.LOW: "1-2 hours",
    Complexity.MEDIUM: "4-8 hours",
    Complexity.HIGH: "1-2 days",
}
DEFAULT_TIME_ESTIMATE = "2-4 hours"

ROLLBACK_STEPS = (
    "Stop new deployment",
    "Restore previous configuration",
    "Verify system stability",
    "Update monitoring dashboards",
)


def task_summary(descriptor: TaskDescriptor) -> str:
    summary = f"{descriptor.type.value.capitalize()} {descriptor.target}"
    if descriptor.environment:
        summary += f" in {descriptor.environment.value}"
    return summary


def generate_prerequisites(descriptor: TaskDescriptor) -> List[str]:
    prerequisites: List[str] = []

    if descriptor.target == "kubernetes" or "k8s" in descriptor.raw_input.lower():
        prerequisites.extend(["Kubernetes cluster access", "kubectl configured"])

    if descriptor.environment == Environment.PRODUCTION:
        prerequisites.extend(["Change management approval", "Backup verification"])

    prerequisites.extend(["Access to internal documentation", "Required permissions verified"])

    return list(dict.fromkeys(prerequisites))


def assess_complexity(descriptor: TaskDescriptor) -> Complexity:
    if descriptor.target in COMPLEX_TOOLS:
        return Complexity.HIGH
    if len(descriptor.parameters) > 2:
        return Complexity.MEDIUM
    return Complexity.LOW


def estimate_time(descriptor: TaskDescriptor) -> str:
    return TIME_ESTIMATES.get(assess_complexity(descriptor), DEFAULT_TIME_ESTIMATE)


def assess_risk(descriptor: TaskDescriptor) -> RiskLevel:
    """Risk of carrying out a task.

    This is the single risk policy: plans and every risk display use it.
    Production work is high risk, urgent work outside production is medium
    risk, everything else is low risk.
    """
    if descriptor.environment == Environment.PRODUCTION:
        return RiskLevel.HIGH
    if descriptor.urgency == Urgency.HIGH:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def generate_rollback_steps(descriptor: TaskDescriptor) -> List[str]:
    return list(ROLLBACK_STEPS)


def generate_implementation_plan(descriptor: TaskDescriptor) -> ImplementationPlan:
    """
    Generate an implementation plan from a task descriptor.

    Args:
        descriptor: Classified task

    Returns:
        ImplementationPlan with steps, prerequisites, estimate, risk and rollback
    """
    logger.info(
        "generating_plan",
        type=descriptor.type.value,
        target=descriptor.target,
    )
    generator = get_step_generator(descriptor.target)
    return ImplementationPlan(
        task_summary=task_summary(descriptor),
        steps=generator(descriptor),
        prerequisites=generate_prerequisites(descriptor),
        estimated_time=estimate_time(descriptor),
        risk_level=assess_risk(descriptor),
        rollback_steps=generate_rollback_steps(descriptor),
    )
