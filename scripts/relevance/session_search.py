"""
Keyword search and timeline over stored sessions.

Search matches a keyword against session content and orders the matches
with BM25 relevance blended with recency:

    relevance = bm25_weight * normalized_bm25 + temporal_weight * time_weight

(0.7 / 0.3 by default, see search.* in the config).
"""

import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import numpy as np
from rank_bm25 import BM25Okapi

from recall_config import config

from .documents import session_document
from .ranker import calculate_time_weight, session_timestamp
from .tokenizer import tokenize


def _contains(value: Any, needle: str) -> bool:
    return isinstance(value, str) and needle in value.lower()


def _is_match(session: Dict[str, Any], document: List[str], query_tokens: List[str], needle: str) -> bool:
    """
    Check whether a session mentions the query at all.

    A session matches on any query token in its document, or on the
    lowercase query as a substring of the summary, a stored keyword, or an
    observation's summary, file, command or user request.
    """
    if any(token in document for token in query_tokens):
        return True

    if _contains(session.get('summary'), needle):
        return True

    stored = session.get('keywords')
    if isinstance(stored, (list, tuple)) and any(_contains(str(k), needle) for k in stored):
        return True

    observations = session.get('observations')
    if not isinstance(observations, (list, tuple)):
        return False

    for observation in observations:
        if not isinstance(observation, dict):
            continue
        details = observation.get('details')
        details = details if isinstance(details, dict) else {}
        context = observation.get('context')
        context = context if isinstance(context, dict) else {}
        fields = (
            observation.get('summary'),
            details.get('file'),
            details.get('command'),
            context.get('lastUserMessage'),
        )
        if any(_contains(field, needle) for field in fields):
            return True

    return False


def search_sessions(
    query: str,
    sessions: List[Dict[str, Any]],
    limit: Optional[int] = None,
    now: Optional[datetime] = None
) -> List[Dict]:
    """
    Search sessions for a keyword.

    Args:
        query: Keyword or phrase
        sessions: Session records
        limit: Maximum results (default: search.limit)
        now: Reference time for recency (default: current time)

    Returns:
        List of dicts with session, relevance_score, bm25_score and
        temporal_score, best first
    """
    if limit is None:
        limit = config.get('search.limit', 10)
    if not sessions or not query or not query.strip():
        return []

    needle = query.strip().lower()
    query_tokens = tokenize(query)

    documents = []
    for index, session in enumerate(sessions):
        try:
            documents.append(session_document(session))
        except Exception as e:
            print(f"Warning: Could not read session {index} for search: {e}", file=sys.stderr)
            documents.append([])

    matches = [
        i for i, (session, document) in enumerate(zip(sessions, documents))
        if isinstance(session, dict) and _is_match(session, document, query_tokens, needle)
    ]
    if not matches:
        return []

    # BM25Okapi divides by the average document length
    if query_tokens and any(documents):
        bm25 = BM25Okapi(documents)
        bm25_scores = np.asarray(bm25.get_scores(query_tokens), dtype=float)
    else:
        bm25_scores = np.zeros(len(sessions))

    # Normalize BM25 scores to 0-1 range
    max_bm25 = bm25_scores.max() if bm25_scores.max() > 0 else 1.0
    normalized_bm25 = np.clip(bm25_scores / max_bm25, 0.0, 1.0)

    temporal_scores = np.array([
        calculate_time_weight(session_timestamp(sessions[i]), now) for i in matches
    ])

    bm25_weight = config.get('search.bm25_weight', 0.7)
    temporal_weight = config.get('search.temporal_weight', 0.3)
    combined = bm25_weight * normalized_bm25[matches] + temporal_weight * temporal_scores

    results = [
        {
            "session": sessions[i],
            "relevance_score": float(combined[j]),
            "bm25_score": float(normalized_bm25[i]),
            "temporal_score": float(temporal_scores[j]),
        }
        for j, i in enumerate(matches)
    ]
    results.sort(key=lambda r: r["relevance_score"], reverse=True)

    return results[:limit]


def _recency_key(session: Dict[str, Any]):
    timestamp = session_timestamp(session) if isinstance(session, dict) else None
    if timestamp is None:
        return (False, 0.0)
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return (True, timestamp.timestamp())


def timeline(
    sessions: List[Dict[str, Any]],
    count: Any = None,
    max_count: Optional[int] = None
) -> List[Dict[str, Any]]:
    """
    Most recent sessions, newest first.

    Args:
        sessions: Session records
        count: How many to return; strings are parsed, invalid values
            fall back to timeline.default_count
        max_count: Upper bound on count (default: timeline.max_count)

    Returns:
        Session records; ones without a readable timestamp sort last
    """
    default_count = config.get('timeline.default_count', 10)
    if max_count is None:
        max_count = config.get('timeline.max_count', 20)

    try:
        count = int(count) if count is not None else default_count
    except (TypeError, ValueError):
        count = default_count
    if count < 1:
        count = default_count

    count = min(count, max_count)

    return sorted(sessions, key=_recency_key, reverse=True)[:count]
