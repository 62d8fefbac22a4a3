"""
Turn contexts and session records into token documents.

A session record is the dict the recall store keeps per session:

    {
        "timestamp": "2026-02-16T16:04:58Z",
        "summary": "...",
        "conversations": [{"message": "...", "type": "question"}, ...],
        "observations": [
            {
                "summary": "Edited auth/login.py: ...",
                "details": {"file": "src/auth/login.py", "command": None},
                "context": {"lastUserMessage": "..."}
            },
            ...
        ]
    }

Every field is optional; missing or malformed parts contribute no tokens.
"""

from typing import Any, Dict, Iterable, List, Optional

from recall_config import config

from .schema import RecallContext
from .tokenizer import tokenize, tokenize_path


def _entries(value: Any) -> List[Dict[str, Any]]:
    """Dict entries of a list field, skipping anything else."""
    if not isinstance(value, (list, tuple)):
        return []
    return [entry for entry in value if isinstance(entry, dict)]


def _observation_tokens(observation: Dict[str, Any]) -> List[str]:
    tokens = tokenize(observation.get('summary'))

    details = observation.get('details')
    if isinstance(details, dict):
        tokens.extend(tokenize_path(details.get('file')))
        tokens.extend(tokenize(details.get('command')))

    # Why the operation happened, when the capture recorded it
    context = observation.get('context')
    if isinstance(context, dict):
        tokens.extend(tokenize(context.get('lastUserMessage')))

    return tokens


def context_document(context: RecallContext) -> List[str]:
    """
    Tokens describing the current working context.

    Args:
        context: Working directory plus optional recent files

    Returns:
        Path tokens of the working directory followed by each recent file
    """
    tokens = tokenize_path(context.cwd)
    for file_path in context.recent_files:
        tokens.extend(tokenize_path(file_path))
    return tokens


def session_document(session: Dict[str, Any]) -> List[str]:
    """
    Tokens describing one recorded session.

    Sources, in order: summary, conversation messages, then for each
    observation its summary, file path, command and user request.

    Args:
        session: Session record

    Returns:
        Concatenated token list (duplicates kept)
    """
    tokens = tokenize(session.get('summary'))

    for conversation in _entries(session.get('conversations')):
        tokens.extend(tokenize(conversation.get('message')))

    for observation in _entries(session.get('observations')):
        tokens.extend(_observation_tokens(observation))

    return tokens


def session_keywords(
    observations: Optional[Iterable[Dict[str, Any]]],
    conversations: Optional[Iterable[Dict[str, Any]]],
    limit: Optional[int] = None
) -> List[str]:
    """
    Distinct search keywords for a session about to be stored.

    Args:
        observations: Tool-operation observations captured in the session
        conversations: User messages captured in the session
        limit: Maximum number of keywords (default: keywords.limit)

    Returns:
        Unique keywords in first-seen order, conversations first
    """
    if limit is None:
        limit = config.get('keywords.limit', 50)

    keywords = {}

    for conversation in _entries(list(conversations or [])):
        keywords.update(dict.fromkeys(tokenize(conversation.get('message'))))

    for observation in _entries(list(observations or [])):
        keywords.update(dict.fromkeys(tokenize(observation.get('summary'))))
        details = observation.get('details')
        if isinstance(details, dict):
            keywords.update(dict.fromkeys(tokenize_path(details.get('file'))))
            keywords.update(dict.fromkeys(tokenize(details.get('command'))))

    return list(keywords)[:limit]
