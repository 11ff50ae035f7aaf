"""Ranked recommendations with a single human-readable reason each.

Reasons are picked from ``REASON_RULES``, an ordered decision table: the
first rule whose predicate holds formats the reason.
"""
from dataclasses import dataclass
from typing import Callable, Sequence

from wheel_analyzer.analytics.streaks import break_at, current_streak
from wheel_analyzer.analytics.transitions import most_likely_next
from wheel_analyzer.core.models import (
    OutcomeStatistics,
    PairStats,
    ProbabilityScore,
    Recommendation,
    StreakBreakItem,
    StreakBreakStats,
    TransitionStats,
)

TOP_N = 2
OWN_STREAK_BREAK_PCT = 25.0
CONTEXT_STREAK_MIN = 2
CONTEXT_BREAK_PCT = 20.0


@dataclass(frozen=True)
class RuleContext:
    score: ProbabilityScore
    stats: OutcomeStatistics
    streak: int
    streak_break: StreakBreakItem | None
    last: int | None
    best_after: PairStats | None


@dataclass(frozen=True)
class ReasonRule:
    name: str
    applies: Callable[[RuleContext], bool]
    render: Callable[[RuleContext], str]
    prefixed: bool = True


REASON_RULES: tuple[ReasonRule, ...] = (
    ReasonRule(
        "streak_break",
        lambda c: c.streak >= 1 and c.streak_break is not None and c.streak_break.percentage >= OWN_STREAK_BREAK_PCT,
        lambda c: (f"{c.score.outcome} has come up {c.streak} times in a row; "
                   f"{c.streak_break.percentage:.0f}% of its series break at this length"),
        prefixed=False,
    ),
    ReasonRule(
        "transition",
        lambda c: (c.last is not None and c.best_after is not None
                   and c.best_after.next == c.score.outcome and c.best_after.count > 0),
        lambda c: (f"After {c.last} usually comes {c.score.outcome} "
                   f"({c.best_after.percentage:.0f}%, {c.best_after.count} times)"),
    ),
    ReasonRule(
        "frequency",
        # an unseen outcome only carries the neutral default
        lambda c: c.score.frequency_score >= 25 and c.stats.count > 0,
        lambda c: f"Across the whole history: {c.stats.percentage:.0f}% of spins ({c.stats.count} times)",
    ),
    ReasonRule(
        "hot",
        lambda c: c.stats.is_hot,
        lambda c: f"Hot: frequent in recent spins ({c.score.hot_cold_score:.0f}%)",
    ),
    ReasonRule(
        "cold",
        lambda c: c.stats.is_cold,
        lambda c: "Cold: not seen for a while, due for a return",
    ),
    ReasonRule(
        "balanced",
        lambda c: True,
        lambda c: f"Balanced choice (frequency {c.score.frequency_score:.0f}%)",
    ),
)


def pick_rule(ctx: RuleContext) -> ReasonRule:
    for rule in REASON_RULES:
        if rule.applies(ctx):
            return rule
    raise LookupError("no reason rule matched")


def streak_context(labels: Sequence[int], streak_stats: dict[int, StreakBreakStats]) -> tuple[int | None, str]:
    """Note about the outcome currently on a run, if its series tends to break here."""
    if not labels:
        return None, ""
    last = labels[-1]
    streak = current_streak(labels, last)
    item = break_at(streak_stats.get(last), streak)
    if streak >= CONTEXT_STREAK_MIN and item is not None and item.percentage >= CONTEXT_BREAK_PCT:
        return last, f"{last} has come up {streak} times in a row, series often breaks here. "
    return last, ""


def generate_recommendations(
    scores: Sequence[ProbabilityScore],
    statistics: Sequence[OutcomeStatistics],
    labels: Sequence[int],
    transitions: TransitionStats,
    streak_stats: Sequence[StreakBreakStats],
    top_n: int = TOP_N,
) -> list[Recommendation]:
    by_outcome = {s.outcome: s for s in statistics}
    breaks = {s.outcome: s for s in streak_stats}
    last, note = streak_context(labels, breaks)
    best_after = most_likely_next(transitions, last) if last is not None else None

    ranked = sorted(scores, key=lambda s: -s.probability)
    out = []
    for score in ranked[:top_n]:
        streak = current_streak(labels, score.outcome)
        ctx = RuleContext(
            score=score,
            stats=by_outcome[score.outcome],
            streak=streak,
            streak_break=break_at(breaks.get(score.outcome), streak),
            last=last,
            best_after=best_after,
        )
        rule = pick_rule(ctx)
        prefix = note if rule.prefixed and score.outcome != last else ""
        out.append(Recommendation(
            outcome=score.outcome,
            probability=score.probability,
            confidence=score.confidence,
            reason=(prefix + rule.render(ctx)).strip(),
        ))
    return out
