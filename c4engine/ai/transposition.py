"""
transposition.py - Memo table for solved positions

Maps canonical packed keys to score vectors. Entries are never evicted, so
the table grows for as long as its solver lives; that is only practical for
small boards such as 4x5.
"""

from typing import Dict, Optional, Tuple

ScoreVector = Tuple[float, ...]


class TranspositionTable:
    def __init__(self):
        self.table: Dict[int, ScoreVector] = {}
        self.hits = 0
        self.misses = 0

    def get(self, key: int) -> Optional[ScoreVector]:
        scores = self.table.get(key)
        if scores is None:
            self.misses += 1
        else:
            self.hits += 1
        return scores

    def put(self, key: int, scores: ScoreVector) -> None:
        self.table[key] = scores

    def __contains__(self, key: int) -> bool:
        return key in self.table

    def __len__(self) -> int:
        return len(self.table)

    def stats(self) -> Dict[str, int]:
        return {'entries': len(self.table), 'hits': self.hits, 'misses': self.misses}
