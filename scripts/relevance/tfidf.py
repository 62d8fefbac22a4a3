"""
TF-IDF weighting over token documents.

Formula:
    tf(t, d)  = count(t, d) / max_count(d)
    idf(t)    = ln((N + 1) / (df(t) + 1)) + 1
    w(t, d)   = tf(t, d) * idf(t)

Where:
    N     = number of documents the DF table was built from
    df(t) = number of those documents containing t at least once

The smoothing keeps idf positive, including for tokens missing from the
DF table. Vectors are sparse dicts: absent tokens weigh zero.
"""

import math
from collections import Counter
from typing import Dict, Iterable, List


def term_frequency(tokens: List[str]) -> Dict[str, float]:
    """
    Normalized term frequency for one document.

    Args:
        tokens: Document tokens (duplicates count)

    Returns:
        {token: count / max_count}; the most frequent token scores 1.0,
        an empty document yields {}
    """
    counts = Counter(tokens)
    max_count = max(counts.values(), default=0) or 1

    return {token: count / max_count for token, count in counts.items()}


def document_frequency(documents: Iterable[List[str]]) -> Dict[str, int]:
    """
    Count the documents each token appears in.

    Args:
        documents: One token list per corpus member

    Returns:
        {token: number of documents containing it}
    """
    df = Counter()
    for tokens in documents:
        df.update(set(tokens))
    return dict(df)


def tfidf(tokens: List[str], df_table: Dict[str, int], total_docs: int) -> Dict[str, float]:
    """
    TF-IDF vector for one document.

    The caller must build df_table over the same document set that is
    being scored; nothing here checks it.

    Args:
        tokens: Document tokens
        df_table: Output of document_frequency over the active corpus
        total_docs: Number of documents df_table was built from

    Returns:
        Sparse {token: weight} vector
    """
    vector = {}
    for token, tf in term_frequency(tokens).items():
        idf = math.log((total_docs + 1) / (df_table.get(token, 0) + 1)) + 1
        vector[token] = tf * idf
    return vector
