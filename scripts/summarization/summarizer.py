"""
Session summary orchestrator.

Picks the LLM summarizer when credentials are available and falls back to
the heuristic summarizer on any failure.
"""

import sys
from typing import Dict, List, Optional, Tuple

from recall_config import config

from .base import BaseSummarizer
from .heuristic_summarizer import HeuristicSummarizer
from .llm_summarizer import LLMSummarizer


class SessionSummarizer:
    """
    Main summary orchestrator.

    Modes (summarization.mode):
    - auto: LLM if an API key is configured, heuristic otherwise
    - llm: same as auto, but warns when the LLM cannot be set up
    - local: heuristic only
    """

    def __init__(self, llm: Optional[BaseSummarizer] = None):
        """
        Initialize summarizer.

        Args:
            llm: Summarizer to try first (default: built from config)
        """
        self.enabled = config.get('summarization.enabled', True)
        self.mode = config.get('summarization.mode', 'auto')
        self.fallback = HeuristicSummarizer()

        self.llm = llm
        if self.llm is None and self.enabled and self.mode != 'local':
            self.llm = self._create_llm()

    def _create_llm(self) -> Optional[LLMSummarizer]:
        """Build the LLM summarizer from config, or None without credentials."""
        api_key = config.get('summarization.api_key')
        if not api_key:
            if self.mode == 'llm':
                print("Warning: summarization.mode is 'llm' but no API key is set, "
                      "using heuristic summaries", file=sys.stderr)
            return None

        try:
            return LLMSummarizer(
                api_key=api_key,
                model=config.get('summarization.model', 'claude-3-5-haiku-20241022'),
                max_tokens=config.get('summarization.max_tokens', 300),
                max_chars=config.get('summarization.max_chars', 250),
                language=config.get('summarization.language', 'English'),
                timeout=config.get('summarization.timeout_sec', 30)
            )
        except Exception as e:
            print(f"Warning: Failed to initialize LLM summarizer: {e}", file=sys.stderr)
            return None

    def summarize(
        self,
        observations: Optional[List[Dict]],
        conversations: Optional[List[Dict]],
        project: Optional[str] = None
    ) -> Tuple[str, str]:
        """
        Summarize a session (with fallback).

        Args:
            observations: Tool-operation observations
            conversations: Captured user messages
            project: Project name

        Returns:
            Tuple of (summary, summary_type) where summary_type is
            "ai" or "local"
        """
        if self.llm is not None:
            try:
                summary = self.llm.summarize(observations, conversations, project)
                if summary:
                    return summary, self.llm.summary_type
            except Exception as e:
                print(f"Warning: LLM summary failed: {e}", file=sys.stderr)

        # Fall back to heuristic
        return self.fallback.summarize(observations, conversations, project), self.fallback.summary_type
