"""
Choose which ranked sessions to show at session start.
"""

from typing import List, Optional

from recall_config import config

from .schema import ScoredSession


def select_relevant(
    ranked: List[ScoredSession],
    min_score: Optional[float] = None,
    max_sessions: Optional[int] = None,
    fallback_count: Optional[int] = None
) -> List[ScoredSession]:
    """
    Apply the display policy to a ranking.

    Entries below min_score are dropped and the rest capped at
    max_sessions. If nothing clears the threshold, the top fallback_count
    entries are returned anyway so recent work is still shown.

    Args:
        ranked: Output of rank_sessions (already sorted)
        min_score: Minimum score (default: selection.min_score)
        max_sessions: Maximum entries (default: selection.max_sessions)
        fallback_count: Entries to show when none qualify
            (default: selection.fallback_count)

    Returns:
        Selected entries, in ranking order
    """
    if min_score is None:
        min_score = config.get('selection.min_score', 0.1)
    if max_sessions is None:
        max_sessions = config.get('selection.max_sessions', 5)
    if fallback_count is None:
        fallback_count = config.get('selection.fallback_count', 3)

    selected = [item for item in ranked if item.score >= min_score][:max_sessions]

    if not selected:
        return list(ranked[:fallback_count])

    return selected
