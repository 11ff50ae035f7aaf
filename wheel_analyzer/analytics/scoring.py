from typing import Sequence

from wheel_analyzer.analytics.outcomes import recent_percentage
from wheel_analyzer.analytics.streaks import break_at, current_streak
from wheel_analyzer.core.models import (
    AnalysisConfig,
    DEFAULT_CONFIG,
    OutcomeStatistics,
    ProbabilityScore,
    StreakBreakStats,
)

NEUTRAL_SCORE = 25.0
TREND_SPAN = 20
MAX_STREAK_PENALTY = 35.0
STREAK_PENALTY_RATE = 0.8
# Tunable: applied to the cumulative break share when the exact streak
# length was never observed.
STREAK_FALLBACK_FACTOR = 0.5
MIN_PROBABILITY = 5.0

# (min history length, confidence), checked top to bottom
CONFIDENCE_STEPS = ((50, 0.9), (30, 0.75), (15, 0.6), (5, 0.4))
MIN_CONFIDENCE = 0.2


def frequency_score(stats: OutcomeStatistics, total: int) -> float:
    if total == 0:
        return NEUTRAL_SCORE
    return stats.percentage


def hot_cold_score(stats: OutcomeStatistics, labels: Sequence[int], window: int) -> float:
    if not labels[-window:]:
        return NEUTRAL_SCORE
    pct = recent_percentage(labels, stats.outcome, window) * 100
    if stats.is_hot:
        return min(pct * 1.5, 100.0)
    if stats.is_cold:
        # cold outcomes keep a floor, they may be due
        return max(pct * 0.5 + 15, 10.0)
    return pct


def trend_score(stats: OutcomeStatistics, labels: Sequence[int]) -> float:
    """Linearly weighted frequency over the last TREND_SPAN labels plus a recency bonus."""
    weighted = 0
    total_weight = 0
    for i, y in enumerate(labels[-TREND_SPAN:]):
        total_weight += i + 1
        if y == stats.outcome:
            weighted += i + 1
    if total_weight == 0:
        return NEUTRAL_SCORE
    pct = weighted / total_weight * 100
    if stats.last_seen_index is not None:
        bonus = max(0, 20 - stats.last_seen_index * 2)
        return min(pct + bonus, 100.0)
    return pct


def streak_penalty(streak: int, streak_stats: StreakBreakStats | None) -> float | None:
    """Penalty for an outcome currently on a run; None when no run or no break data."""
    if streak < 1 or streak_stats is None or not streak_stats.break_distribution:
        return None
    exact = break_at(streak_stats, streak)
    if exact is not None:
        pct = exact.percentage
    else:
        cumulative = sum(b.percentage for b in streak_stats.break_distribution if b.streak_length <= streak)
        pct = cumulative * STREAK_FALLBACK_FACTOR
    return min(MAX_STREAK_PENALTY, pct * STREAK_PENALTY_RATE)


def confidence_for(total: int) -> float:
    for min_len, conf in CONFIDENCE_STEPS:
        if total >= min_len:
            return conf
    return MIN_CONFIDENCE


def score_outcomes(
    statistics: Sequence[OutcomeStatistics],
    labels: Sequence[int],
    config: AnalysisConfig = DEFAULT_CONFIG,
    streak_stats: Sequence[StreakBreakStats] = (),
) -> list[ProbabilityScore]:
    total = len(labels)
    by_outcome = {s.outcome: s for s in streak_stats}
    confidence = confidence_for(total)
    out = []
    for stats in statistics:
        f = frequency_score(stats, total)
        hc = hot_cold_score(stats, labels, config.recent_spins_window)
        t = trend_score(stats, labels)
        p = f * config.frequency_weight + hc * config.hot_cold_weight + t * config.trend_weight

        penalty = streak_penalty(current_streak(labels, stats.outcome), by_outcome.get(stats.outcome))
        if penalty is not None:
            p = max(MIN_PROBABILITY, p - penalty)

        out.append(ProbabilityScore(
            outcome=stats.outcome,
            probability=p,
            frequency_score=f,
            hot_cold_score=hc,
            trend_score=t,
            confidence=confidence,
        ))
    return out
