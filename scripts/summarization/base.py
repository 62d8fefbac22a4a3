"""
Common interface for session summarizers.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional


class BaseSummarizer(ABC):
    """
    Turns a session's captured activity into a short summary.

    Implementations must be swappable; SessionSummarizer picks one.
    """

    # Stored with the session as summary_type
    summary_type = "local"

    @abstractmethod
    def summarize(
        self,
        observations: Optional[List[Dict]],
        conversations: Optional[List[Dict]],
        project: Optional[str] = None
    ) -> str:
        """
        Summarize one session.

        Args:
            observations: Tool-operation observations
            conversations: Captured user messages
            project: Project name, if known

        Returns:
            Summary text
        """
        pass
