import enum


class HealthStatus(str, enum.Enum):
    RED = "Red"
    AMBER = "Amber"
    GREEN = "Green"


class RiskLevel(str, enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class UserRole(str, enum.Enum):
    PROJECT_MANAGER = "project_manager"
    DELIVERY_MANAGER = "delivery_manager"
    ADMIN = "admin"


class LlmProvider(str, enum.Enum):
    OPENAI = "OpenAI"
    DEEPSEEK = "DeepSeek"
    GOOGLE = "Google"


class ProjectImportance(str, enum.Enum):
    STRATEGIC = "Strategic"
    CRITICAL = "Critical"
    STANDARD = "Standard"
    MEDIUM = "Medium"
