# SreBuddy task and plan models
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from srebuddy.enums import Environment, RiskLevel, TaskType, Urgency


class TaskDescriptor(BaseModel):
    """Structured result of classifying a free-text SRE request."""
    type: TaskType = TaskType.IMPLEMENT # Resolved task category
    target: str = "unknown" # Tool or service the request is about
    parameters: Dict[str, str] = Field(default_factory=dict) # Extracted parameters, in extraction order
    environment: Optional[Environment] = None # Target environment, if mentioned
    urgency: Optional[Urgency] = None # Urgency, if mentioned
    raw_input: str = "" # Original request, verbatim

    @field_validator("target")
    @classmethod
    def _target_not_blank(cls, value: str) -> str:
        return value if value and value.strip() else "unknown"


class ImplementationStep(BaseModel):
    """A single step of an implementation plan."""
    step: int # Ordinal position, starting at 1
    title: str # Short step title
    description: str # What the step does
    code_example: Optional[str] = None # Optional code or manifest snippet
    documentation: Optional[List[str]] = None # Documentation references
    validation_steps: Optional[List[str]] = None # Checks to run after the step


class ImplementationPlan(BaseModel):
    """Complete implementation plan for a task."""
    task_summary: str # One-line summary of the task
    steps: List[ImplementationStep] # Ordered implementation steps
    prerequisites: List[str] # Unique prerequisites, in order of discovery
    estimated_time: str # Human-readable time range
    risk_level: RiskLevel # Risk of carrying out the plan
    rollback_steps: List[str] # Ordered rollback actions


class PromptTemplate(BaseModel):
    """A prompt template parsed from the template corpus."""
    model_config = ConfigDict(frozen=True)

    command: str # Lower-cased command key
    examples: Tuple[str, ...] # Example requests, in corpus order
    tags: Tuple[str, ...] = () # Tag strings
    prompt: str # Prompt body with placeholder tokens


class DocumentationRecord(BaseModel):
    """A documentation hit returned by an external documentation source."""
    title: Optional[str] = None
    content: Optional[str] = None
    summary: Optional[str] = None
    url: Optional[str] = None
