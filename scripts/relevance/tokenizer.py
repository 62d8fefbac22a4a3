"""
Keyword extraction for relevance scoring.

Two entry points:
- tokenize: free text (summaries, messages, shell commands)
- tokenize_path: file and directory paths, split on separators and
  camelCase/snake_case/kebab-case boundaries
"""

import re
from typing import List, Optional

# Stop words: English function words, Korean particles and code keywords.
# Code keywords keep pasted snippets from dominating the term space.
STOPWORDS = frozenset([
    # English
    'the', 'a', 'an', 'is', 'are', 'was', 'were', 'be', 'been', 'being',
    'have', 'has', 'had', 'do', 'does', 'did', 'will', 'would', 'could', 'should',
    'may', 'might', 'must', 'shall', 'can', 'need', 'dare', 'ought', 'used',
    'to', 'of', 'in', 'for', 'on', 'with', 'at', 'by', 'from', 'as', 'into',
    'through', 'during', 'before', 'after', 'above', 'below', 'between',
    'and', 'but', 'or', 'nor', 'so', 'yet', 'both', 'either', 'neither',
    'not', 'only', 'own', 'same', 'than', 'too', 'very', 'just',
    'this', 'that', 'these', 'those', 'it', 'its',
    # Korean
    '이', '그', '저', '것', '수', '등', '들', '및', '에', '의', '를', '을',
    '은', '는', '가', '와', '과', '로', '으로', '에서', '까지', '부터',
    # Code
    'const', 'let', 'var', 'function', 'return', 'import', 'export',
    'true', 'false', 'null', 'undefined', 'new', 'class', 'extends',
    'async', 'await', 'try', 'catch', 'if', 'else', 'while',
])

# ASCII word characters, whitespace and Hangul syllables survive; the rest
# becomes a separator.
_NON_WORD = re.compile(r'[^\w\s\uac00-\ud7a3]', re.ASCII)
_DIGITS = re.compile(r'^[0-9]+$')
_EXTENSION = re.compile(r'\.[^.]+$')
_CAMEL_BOUNDARY = re.compile(r'([a-z])([A-Z])')
_SEGMENT_SEPARATORS = re.compile(r'[-_\s]+')


def _is_keyword(word: str) -> bool:
    return len(word) >= 2 and word not in STOPWORDS


def tokenize(text: Optional[str]) -> List[str]:
    """
    Extract keywords from free text.

    Args:
        text: Input text (None and non-strings are accepted)

    Returns:
        Lowercase keywords in source order, duplicates kept

    Examples:
        >>> tokenize("Fixed the JWT refresh-token bug in 2 places!")
        ['fixed', 'jwt', 'refresh', 'token', 'bug', 'places']

        >>> tokenize(None)
        []
    """
    if not text:
        return []

    normalized = _NON_WORD.sub(' ', str(text).lower())

    return [
        word for word in normalized.split()
        if _is_keyword(word) and not _DIGITS.match(word)
    ]


def tokenize_path(path: Optional[str]) -> List[str]:
    """
    Extract keywords from a file or directory path.

    Each path segment loses its last extension, then camelCase boundaries
    and hyphen/underscore separators split it into words.

    Args:
        path: POSIX or Windows style path

    Returns:
        Lowercase keywords in path order

    Examples:
        >>> tokenize_path("src/auth/handleUserLogin.js")
        ['src', 'auth', 'handle', 'user', 'login']

        >>> tokenize_path("projects\\\\auth-service\\\\README.md")
        ['projects', 'auth', 'service', 'readme']
    """
    if not path:
        return []

    segments = [
        _EXTENSION.sub('', segment)
        for segment in str(path).replace('\\', '/').split('/')
    ]

    keywords = []
    for segment in segments:
        if len(segment) <= 1:
            continue
        # handleUserLogin -> handle User Login
        spaced = _CAMEL_BOUNDARY.sub(r'\1 \2', segment).lower()
        keywords.extend(
            word for word in _SEGMENT_SEPARATORS.split(spaced)
            if _is_keyword(word)
        )

    return keywords
