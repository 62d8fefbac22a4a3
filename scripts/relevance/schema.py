"""
Input and output records for relevance ranking.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union


@dataclass
class RecallContext:
    """Where the user is working right now."""
    cwd: str
    recent_files: List[str] = field(default_factory=list)

    @classmethod
    def coerce(cls, value: Union['RecallContext', Dict[str, Any], str, None]) -> 'RecallContext':
        """
        Build a context from a context, a hook-style dict or a bare path.

        Dict keys accepted: cwd / workingDirectoryPath and
        recent_files / recentFiles / recentFilePaths.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, dict):
            cwd = value.get('cwd') or value.get('workingDirectoryPath') or ''
            recent = (
                value.get('recent_files')
                or value.get('recentFiles')
                or value.get('recentFilePaths')
                or []
            )
            if isinstance(recent, str):
                recent = [recent]
            return cls(cwd=cwd, recent_files=list(recent))
        return cls(cwd=value or '')


@dataclass
class ScoredSession:
    """A session record with the scores that placed it in the ranking."""
    session: Dict[str, Any]
    similarity: float = 0.0
    time_weight: float = 0.0
    structural_bonus: float = 0.0
    score: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (the session record is passed through as is)."""
        return {
            'session': self.session,
            'similarity': self.similarity,
            'time_weight': self.time_weight,
            'structural_bonus': self.structural_bonus,
            'score': self.score,
        }
