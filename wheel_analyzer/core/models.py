import secrets
import time

from pydantic import BaseModel, ConfigDict, Field


class Event(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    outcome: int
    timestamp: float


def new_event(outcome: int, timestamp: float | None = None) -> Event:
    ts = time.time() if timestamp is None else timestamp
    return Event(id=f"{int(ts * 1000)}-{secrets.token_hex(4)}", outcome=outcome, timestamp=ts)


class AnalysisConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    recent_spins_window: int = Field(default=15, ge=1)  # trailing window for hot/cold
    hot_threshold: float = 0.35  # share of the window at or above which an outcome is hot
    cold_threshold: float = 0.10  # share at or below which it is cold (full window only)
    frequency_weight: float = 0.6
    hot_cold_weight: float = 0.2
    trend_weight: float = 0.2


DEFAULT_CONFIG = AnalysisConfig()


class OutcomeStatistics(BaseModel):
    outcome: int
    count: int
    percentage: float
    last_seen_index: int | None  # 0 = last event
    average_interval: float
    is_hot: bool
    is_cold: bool


class PairStats(BaseModel):
    prev: int
    next: int
    count: int
    percentage: float


class TransitionStats(BaseModel):
    pairs: list[PairStats]
    pairs_by_prev: dict[int, list[PairStats]]


class StreakBreakItem(BaseModel):
    streak_length: int
    count: int
    percentage: float


class StreakBreakStats(BaseModel):
    outcome: int
    break_distribution: list[StreakBreakItem]
    total_streaks: int
    average_streak_length: float
    most_common_break_after: int
    max_observed_streak: int


class ProbabilityScore(BaseModel):
    outcome: int
    probability: float  # 0..100
    frequency_score: float
    hot_cold_score: float
    trend_score: float
    confidence: float  # 0..1


class Recommendation(BaseModel):
    outcome: int
    probability: float
    confidence: float
    reason: str


class AnalysisResult(BaseModel):
    total_spins: int
    outcome_statistics: list[OutcomeStatistics]
    probability_scores: list[ProbabilityScore]
    recommendations: list[Recommendation]
    transition_stats: TransitionStats
    streak_break_stats: list[StreakBreakStats]
