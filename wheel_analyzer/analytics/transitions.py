from typing import Sequence

from wheel_analyzer.core.alphabet import OUTCOMES
from wheel_analyzer.core.models import PairStats, TransitionStats


def build_transition_stats(labels: Sequence[int], outcomes: Sequence[int] = OUTCOMES) -> TransitionStats:
    """First-order prev -> next counts over the whole history.

    Percentages are relative to how often ``prev`` was followed by anything,
    so the last label (no successor) does not count as a predecessor.
    """
    C = {i: {j: 0 for j in outcomes} for i in outcomes}
    for prev, nxt in zip(labels, labels[1:]):
        C[prev][nxt] += 1

    pairs: list[PairStats] = []
    pairs_by_prev: dict[int, list[PairStats]] = {}
    for prev in outcomes:
        total_prev = sum(C[prev].values())
        row = []
        for nxt in outcomes:
            count = C[prev][nxt]
            pct = (count / total_prev * 100) if total_prev else 0.0
            row.append(PairStats(prev=prev, next=nxt, count=count, percentage=pct))
        pairs.extend(row)
        pairs_by_prev[prev] = sorted(row, key=lambda p: -p.percentage)
    return TransitionStats(pairs=pairs, pairs_by_prev=pairs_by_prev)


def most_likely_next(stats: TransitionStats, prev: int) -> PairStats | None:
    row = stats.pairs_by_prev.get(prev)
    return row[0] if row else None
