"""StatusBoard integration clients.

Clients implement ``BaseIntegration``.  The AI client raises
``AIProviderError`` on failure; it is wrapped by ``ProjectAnalyzer``,
which never lets that error reach a request handler.
"""

from statusboard.integrations.ai_client import AIClient
from statusboard.integrations.base import BaseIntegration

__all__ = [
    "AIClient",
    "BaseIntegration",
]
