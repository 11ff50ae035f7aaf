from typing import Iterable, Sequence

from wheel_analyzer.core.alphabet import OUTCOMES
from wheel_analyzer.core.models import StreakBreakItem, StreakBreakStats


def runs(labels: Iterable[int]) -> list[tuple[int, int]]:
    """Maximal runs as (label, length), in order of appearance."""
    labels = list(labels)
    out = []
    if not labels:
        return out
    cur = labels[0]
    start = 0
    for i in range(1, len(labels)):
        if labels[i] == cur:
            continue
        out.append((cur, i - start))
        cur = labels[i]
        start = i
    # tail
    out.append((cur, len(labels) - start))
    return out


def run_lengths(labels: Sequence[int], outcomes: Sequence[int] = OUTCOMES) -> dict[int, list[int]]:
    lengths: dict[int, list[int]] = {o: [] for o in outcomes}
    for label, length in runs(labels):
        lengths[label].append(length)
    return lengths


def current_streak(labels: Sequence[int], outcome: int) -> int:
    streak = 0
    for y in reversed(labels):
        if y != outcome:
            break
        streak += 1
    return streak


def _stats_for(outcome: int, lengths: list[int]) -> StreakBreakStats:
    total = len(lengths)
    max_len = max(lengths) if lengths else 0
    counts: dict[int, int] = {}
    for n in lengths:
        counts[n] = counts.get(n, 0) + 1

    distribution = []
    most_common, best = 1, 0
    for n in range(1, max_len + 1):
        c = counts.get(n, 0)
        distribution.append(StreakBreakItem(
            streak_length=n, count=c, percentage=(c / total * 100) if total else 0.0,
        ))
        # strict comparison: shortest length wins a tie
        if c > best:
            best, most_common = c, n
    distribution.sort(key=lambda item: -item.percentage)

    return StreakBreakStats(
        outcome=outcome,
        break_distribution=distribution,
        total_streaks=total,
        average_streak_length=(sum(lengths) / total) if total else 0.0,
        most_common_break_after=most_common,
        max_observed_streak=max_len,
    )


def build_streak_break_stats(labels: Sequence[int], outcomes: Sequence[int] = OUTCOMES) -> list[StreakBreakStats]:
    lengths = run_lengths(labels, outcomes)
    return [_stats_for(o, lengths[o]) for o in outcomes]


def break_at(stats: StreakBreakStats | None, length: int) -> StreakBreakItem | None:
    if stats is None:
        return None
    return next((b for b in stats.break_distribution if b.streak_length == length), None)
