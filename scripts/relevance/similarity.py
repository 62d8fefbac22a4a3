"""
Cosine similarity between sparse weight vectors.
"""

import math
from typing import Dict


def cosine_similarity(vec_a: Dict[str, float], vec_b: Dict[str, float]) -> float:
    """
    Calculate cosine similarity of two sparse vectors.

    Args:
        vec_a: {token: weight}
        vec_b: {token: weight}

    Returns:
        Similarity in [0, 1] for non-negative weights; 0.0 when either
        vector has zero norm
    """
    norm_a = math.sqrt(sum(w * w for w in vec_a.values()))
    norm_b = math.sqrt(sum(w * w for w in vec_b.values()))

    if norm_a == 0 or norm_b == 0:
        return 0.0

    # Tokens missing from either side contribute nothing to the dot product
    shared = vec_a.keys() & vec_b.keys()
    dot_product = sum(vec_a[token] * vec_b[token] for token in shared)

    # Guard against 1.0000000000000002 from rounding
    return min(dot_product / (norm_a * norm_b), 1.0)
