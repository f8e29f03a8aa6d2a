from enum import Enum


class TaskType(Enum):
    """Types of SRE tasks."""

    IMPLEMENT = "implement"
    CONFIGURE = "configure"
    MONITOR = "monitor"
    DEPLOY = "deploy"
    DOCS = "docs"
    TROUBLESHOOT = "troubleshoot"


class Environment(Enum):
    """Target environments."""

    PRODUCTION = "production"
    STAGING = "staging"
    DEVELOPMENT = "development"
    TESTING = "testing"


class Urgency(Enum):
    """Urgency of a request."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskLevel(Enum):
    """Risk of carrying out a plan."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Complexity(Enum):
    """Implementation complexity."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
