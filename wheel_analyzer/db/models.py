from sqlmodel import SQLModel, Field

from wheel_analyzer.core.models import Event


class SpinRow(SQLModel, table=True):
    # insertion order is chronological order
    position: int | None = Field(default=None, primary_key=True)
    event_id: str = Field(index=True, unique=True)
    outcome: int = Field(index=True)
    timestamp: float

    @classmethod
    def from_event(cls, e: Event) -> "SpinRow":
        return cls(event_id=e.id, outcome=e.outcome, timestamp=e.timestamp)

    def to_event(self) -> Event:
        return Event(id=self.event_id, outcome=self.outcome, timestamp=self.timestamp)
