from typing import Sequence

from wheel_analyzer.core.alphabet import OUTCOMES
from wheel_analyzer.core.models import AnalysisConfig, DEFAULT_CONFIG, OutcomeStatistics


def recent_percentage(labels: Sequence[int], outcome: int, window: int) -> float:
    """Share (0..1) of ``outcome`` among the last ``window`` labels."""
    recent = labels[-window:]
    if not recent:
        return 0.0
    return sum(1 for y in recent if y == outcome) / len(recent)


def last_seen_index(labels: Sequence[int], outcome: int) -> int | None:
    for i in range(len(labels) - 1, -1, -1):
        if labels[i] == outcome:
            return len(labels) - 1 - i
    return None


def average_interval(labels: Sequence[int], outcome: int) -> float:
    positions = [i for i, y in enumerate(labels) if y == outcome]
    if len(positions) < 2:
        return 0.0
    gaps = [b - a for a, b in zip(positions, positions[1:])]
    return sum(gaps) / len(gaps)


def build_outcome_statistics(
    labels: Sequence[int],
    config: AnalysisConfig = DEFAULT_CONFIG,
    outcomes: Sequence[int] = OUTCOMES,
) -> list[OutcomeStatistics]:
    total = len(labels)
    window = config.recent_spins_window
    window_full = len(labels[-window:]) >= window
    out = []
    for outcome in outcomes:
        count = sum(1 for y in labels if y == outcome)
        recent = recent_percentage(labels, outcome, window)
        out.append(OutcomeStatistics(
            outcome=outcome,
            count=count,
            percentage=(count / total * 100) if total else 0.0,
            last_seen_index=last_seen_index(labels, outcome),
            average_interval=average_interval(labels, outcome),
            is_hot=recent >= config.hot_threshold,
            # short histories never flag cold
            is_cold=recent <= config.cold_threshold and window_full,
        ))
    return out
