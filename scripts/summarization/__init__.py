"""
Session summarization for recall.

Provides LLM-based and heuristic session summaries with automatic fallback.
"""

from .base import BaseSummarizer
from .prompt_templates import SummaryPrompts
from .heuristic_summarizer import HeuristicSummarizer
from .llm_summarizer import LLMSummarizer
from .summarizer import SessionSummarizer

__all__ = [
    'BaseSummarizer',
    'SummaryPrompts',
    'HeuristicSummarizer',
    'LLMSummarizer',
    'SessionSummarizer'
]

__version__ = '1.0.0'
