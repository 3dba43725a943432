from statusboard.db.models.llm_config import LlmConfiguration
from statusboard.db.models.portfolio_analysis import PortfolioAnalysis
from statusboard.db.models.project import Project
from statusboard.db.models.technical_review import TechnicalReview
from statusboard.db.models.weekly_report import WeeklyStatusReport

__all__ = [
    "LlmConfiguration",
    "PortfolioAnalysis",
    "Project",
    "TechnicalReview",
    "WeeklyStatusReport",
]
