from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

EXACT, LOWER, UPPER = 0, 1, 2

# (mover, opponent, black_to_move)
TTKey = Tuple[int, int, bool]


@dataclass
class TTEntry:
    depth: int
    bound: int
    score: int


def classify(score: int, alpha0: int, beta: int) -> int:
    if score <= alpha0:
        return UPPER
    if score >= beta:
        return LOWER
    return EXACT


class TranspositionTable:
    """Search results keyed by position and side to move.

    Lives for a whole game session; callers clear it on reset.
    """

    def __init__(self) -> None:
        self.store: Dict[TTKey, TTEntry] = {}
        self.stats = {"lookups": 0, "hits": 0, "stores": 0, "cutoffs": 0}

    def __len__(self) -> int:
        return len(self.store)

    def probe(self, key: TTKey) -> TTEntry | None:
        self.stats["lookups"] += 1
        e = self.store.get(key)
        if e is not None:
            self.stats["hits"] += 1
        return e

    def cutoff(self, entry: TTEntry, depth: int, alpha: int, beta: int) -> Optional[int]:
        """Return the stored score if it settles this node, else None."""
        if entry.depth < depth:
            return None
        if (
            entry.bound == EXACT
            or (entry.bound == LOWER and entry.score >= beta)
            or (entry.bound == UPPER and entry.score <= alpha)
        ):
            self.stats["cutoffs"] += 1
            return entry.score
        return None

    def save(self, key: TTKey, depth: int, score: int, bound: int) -> None:
        e = self.store.get(key)
        if e is not None and depth < e.depth:
            return
        self.stats["stores"] += 1
        self.store[key] = TTEntry(depth=depth, bound=bound, score=score)

    def clear(self) -> None:
        self.store.clear()
        for k in self.stats:
            self.stats[k] = 0
