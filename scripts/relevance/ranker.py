"""
Relevance ranking of past sessions against the current working context.

Score fusion:
    score = min(similarity * 0.4 + time_weight * 0.45 + structural_bonus, 1.0)

Where:
    similarity       = TF-IDF cosine between context and session documents
    time_weight      = 1 - h/48 within the first 24 hours, exp(-days/14) after
    structural_bonus = 0.15 for sessions with captured conversation, else 0

The time weight drops from 0.5 to ~0.93 right after the 24 hour mark. That
cliff is kept as is; sessions from the last day are ranked by how fresh
they are, older ones by a 14 day exponential decay.

The DF table is rebuilt from the exact corpus on every call since idf is
corpus-relative. Nothing is cached between calls.
"""

import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

import numpy as np

from .documents import context_document, session_document
from .schema import RecallContext, ScoredSession
from .similarity import cosine_similarity
from .tfidf import document_frequency, tfidf

SIMILARITY_WEIGHT = 0.4
TIME_WEIGHT = 0.45
CONVERSATION_BONUS = 0.15
MAX_SCORE = 1.0

FRESH_WINDOW_HOURS = 24.0
DECAY_DAYS = 14.0


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a session timestamp.

    Args:
        value: ISO-8601 string (with or without 'Z'), date string or datetime

    Returns:
        datetime, or None if missing or unparseable
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    try:
        # ISO format: 2026-02-16T16:04:58.123Z
        return datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
    except ValueError:
        return None


def session_timestamp(session: Dict[str, Any]) -> Optional[datetime]:
    """Timestamp of a session record ('timestamp', or legacy 'date')."""
    return parse_timestamp(session.get('timestamp') or session.get('date'))


def _hours_between(then: datetime, now: Optional[datetime]) -> float:
    if now is None:
        now = datetime.now(timezone.utc)

    # Naive values are taken as UTC when compared with aware ones
    if then.tzinfo is None and now.tzinfo is not None:
        then = then.replace(tzinfo=timezone.utc)
    elif then.tzinfo is not None and now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    return (now - then).total_seconds() / 3600


def calculate_time_weight(timestamp: Any, now: Optional[datetime] = None) -> float:
    """
    Recency weight of a session.

    Args:
        timestamp: Session timestamp (string or datetime)
        now: Reference time (default: current time)

    Returns:
        1.0 at age zero, 0.5 at exactly 24 hours, exp(-days/14) beyond;
        0.0 when the timestamp cannot be parsed
    """
    then = parse_timestamp(timestamp)
    if then is None:
        return 0.0

    hours = _hours_between(then, now)

    if hours <= FRESH_WINDOW_HOURS:
        return 1.0 - hours / (2 * FRESH_WINDOW_HOURS)

    days = hours / 24
    return float(np.exp(-days / DECAY_DAYS))


def structural_bonus(session: Dict[str, Any]) -> float:
    """
    Bonus for sessions that captured user conversation.

    Args:
        session: Session record

    Returns:
        0.15 if the session has at least one conversation entry, else 0.0
    """
    conversations = session.get('conversations')
    if isinstance(conversations, (list, tuple)) and len(conversations) > 0:
        return CONVERSATION_BONUS
    return 0.0


def fuse_scores(similarity, time_weight, bonus):
    """
    Combine score components into the final relevance score.

    Accepts scalars or equal-length sequences.

    Args:
        similarity: Cosine similarity (0-1)
        time_weight: Recency weight
        bonus: Structural bonus (0 or 0.15)

    Returns:
        Fused score(s), clamped to at most 1.0
    """
    combined = (
        SIMILARITY_WEIGHT * np.asarray(similarity, dtype=float)
        + TIME_WEIGHT * np.asarray(time_weight, dtype=float)
        + np.asarray(bonus, dtype=float)
    )
    return np.minimum(combined, MAX_SCORE)


def rank_sessions(
    context: Union[RecallContext, Dict[str, Any], str],
    sessions: List[Dict[str, Any]],
    now: Optional[datetime] = None
) -> List[ScoredSession]:
    """
    Rank sessions by relevance to the current context.

    Args:
        context: RecallContext, hook-style dict or working directory path
        sessions: Session records (read only)
        now: Reference time for recency (default: current time)

    Returns:
        ScoredSession list, most relevant first. Equal scores keep corpus
        order.
    """
    if not sessions:
        return []

    context = RecallContext.coerce(context)
    context_tokens = context_document(context)

    session_docs = []
    for index, session in enumerate(sessions):
        try:
            session_docs.append(session_document(session))
        except Exception as e:
            print(f"Warning: Could not read session {index} for ranking: {e}", file=sys.stderr)
            session_docs.append(None)

    df_table = document_frequency(
        [context_tokens] + [tokens for tokens in session_docs if tokens is not None]
    )
    # Unreadable sessions still count in N though they add nothing to DF
    total_docs = len(sessions) + 1

    context_vector = tfidf(context_tokens, df_table, total_docs)

    similarities = np.zeros(len(sessions))
    time_weights = np.zeros(len(sessions))
    bonuses = np.zeros(len(sessions))

    for index, (session, tokens) in enumerate(zip(sessions, session_docs)):
        if tokens is None:
            continue
        try:
            session_vector = tfidf(tokens, df_table, total_docs)
            similarity = cosine_similarity(context_vector, session_vector)
            time_weight = calculate_time_weight(session_timestamp(session), now)
            bonus = structural_bonus(session)
        except Exception as e:
            # One bad record must not cost the whole ranking
            print(f"Warning: Scoring failed for session {index}: {e}", file=sys.stderr)
            continue

        similarities[index] = similarity
        time_weights[index] = time_weight
        bonuses[index] = bonus

    scores = fuse_scores(similarities, time_weights, bonuses)

    ranked = [
        ScoredSession(
            session=session,
            similarity=float(similarities[i]),
            time_weight=float(time_weights[i]),
            structural_bonus=float(bonuses[i]),
            score=float(scores[i])
        )
        for i, session in enumerate(sessions)
    ]

    # sorted() is stable: ties stay in corpus order
    return sorted(ranked, key=lambda item: item.score, reverse=True)
