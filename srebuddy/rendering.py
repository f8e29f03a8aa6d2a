"""Rendering of implementation plans into Markdown results documents."""

from datetime import datetime
from pathlib import Path
from typing import Optional

from jinja2 import Template

from srebuddy import __version__
from srebuddy.enums import RiskLevel
from srebuddy.models import ImplementationPlan, TaskDescriptor

RISK_ICONS = {
    RiskLevel.LOW: "🟢",
    RiskLevel.MEDIUM: "🟡",
    RiskLevel.HIGH: "🔴",
}


def detect_code_language(code: str) -> str:
    """Guess the Markdown code fence language of a code example."""
    if "apiVersion:" in code or "kind:" in code:
        return "yaml"
    if "FROM " in code or "RUN " in code:
        return "dockerfile"
    if "terraform {" in code or 'resource "' in code:
        return "hcl"
    if "#!/bin/bash" in code or "kubectl " in code or "helm " in code:
        return "bash"
    if "{" in code and "}" in code and ('"' in code or ":" in code):
        return "json"
    return "text"


def risk_badge(risk_level: RiskLevel) -> str:
    return f"{RISK_ICONS[risk_level]} {risk_level.value.upper()}"


def load_results_template() -> str:
    """Load the results document template from the package resources."""
    template_file = Path(__file__).parent / "resources" / "results.md.j2"
    with open(template_file, "r", encoding="utf-8") as file:
        content = file.read()
    return content


def render_results(
    descriptor: TaskDescriptor,
    plan: ImplementationPlan,
    additional_context: str = "",
    generated_at: Optional[datetime] = None,
) -> str:
    """
    Render a task and its implementation plan as a Markdown document.

    Args:
        descriptor: Classified task
        plan: Implementation plan for the task
        additional_context: Optional documentation text to include
        generated_at: Timestamp to print, defaults to now

    Returns:
        Markdown document
    """
    template = Template(load_results_template(), trim_blocks=True, lstrip_blocks=True)
    return template.render(
        descriptor=descriptor,
        plan=plan,
        additional_context=additional_context.strip() if additional_context else "",
        generated_at=(generated_at or datetime.now()).isoformat(),
        risk_icon=RISK_ICONS[plan.risk_level],
        code_language=detect_code_language,
        version=__version__,
    )
