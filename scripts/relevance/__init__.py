"""
Relevance engine for session recall.

Ranks previously recorded sessions against the current working context by
fusing TF-IDF cosine similarity, recency decay and a conversation bonus.

Components:
- tokenizer: keyword extraction from text and paths
- tfidf: term/document frequency and TF-IDF vectors
- similarity: cosine similarity of sparse vectors
- documents: context and session token documents, stored keywords
- ranker: score fusion and ranking
- selection: display policy (threshold, cap, fallback)
- session_search: BM25 keyword search and timeline
"""

from .tokenizer import tokenize, tokenize_path, STOPWORDS
from .tfidf import term_frequency, document_frequency, tfidf
from .similarity import cosine_similarity
from .schema import RecallContext, ScoredSession
from .documents import context_document, session_document, session_keywords
from .ranker import (
    rank_sessions,
    calculate_time_weight,
    structural_bonus,
    fuse_scores,
    parse_timestamp,
)
from .selection import select_relevant
from .session_search import search_sessions, timeline

__all__ = [
    'tokenize',
    'tokenize_path',
    'STOPWORDS',
    'term_frequency',
    'document_frequency',
    'tfidf',
    'cosine_similarity',
    'RecallContext',
    'ScoredSession',
    'context_document',
    'session_document',
    'session_keywords',
    'rank_sessions',
    'calculate_time_weight',
    'structural_bonus',
    'fuse_scores',
    'parse_timestamp',
    'select_relevant',
    'search_sessions',
    'timeline',
]

__version__ = '1.0.0'
