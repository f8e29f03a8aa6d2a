"""
Implementation planning.

Turns a classified task into a step-by-step implementation plan.
"""

from srebuddy.planning.plan import (
    assess_complexity,
    assess_risk,
    estimate_time,
    generate_implementation_plan,
    generate_prerequisites,
)
from srebuddy.planning.steps import (
    STEP_GENERATORS,
    generic_steps,
    get_step_generator,
    register_step_generator,
)

__all__ = [
    "assess_complexity",
    "assess_risk",
    "estimate_time",
    "generate_implementation_plan",
    "generate_prerequisites",
    "STEP_GENERATORS",
    "generic_steps",
    "get_step_generator",
    "register_step_generator",
]
