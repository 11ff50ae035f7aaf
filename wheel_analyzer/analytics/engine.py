import logging
from typing import Sequence

from wheel_analyzer.analytics.outcomes import build_outcome_statistics
from wheel_analyzer.analytics.recommendations import generate_recommendations
from wheel_analyzer.analytics.scoring import score_outcomes
from wheel_analyzer.analytics.streaks import build_streak_break_stats
from wheel_analyzer.analytics.transitions import build_transition_stats
from wheel_analyzer.core.alphabet import OUTCOMES
from wheel_analyzer.core.models import AnalysisConfig, AnalysisResult, DEFAULT_CONFIG, Event

log = logging.getLogger(__name__)


def analyze(
    history: Sequence[Event],
    config: AnalysisConfig | None = None,
    outcomes: Sequence[int] = OUTCOMES,
) -> AnalysisResult:
    """Run the full analysis over ``history`` (oldest first). Pure: nothing is kept between calls."""
    config = config or DEFAULT_CONFIG
    labels = [e.outcome for e in history]

    statistics = build_outcome_statistics(labels, config, outcomes)
    transitions = build_transition_stats(labels, outcomes)
    streaks = build_streak_break_stats(labels, outcomes)
    scores = score_outcomes(statistics, labels, config, streaks)
    recommendations = generate_recommendations(scores, statistics, labels, transitions, streaks)

    log.debug("analyzed %d spins, top=%s", len(labels), [r.outcome for r in recommendations])
    return AnalysisResult(
        total_spins=len(labels),
        outcome_statistics=statistics,
        probability_scores=scores,
        recommendations=recommendations,
        transition_stats=transitions,
        streak_break_stats=streaks,
    )
