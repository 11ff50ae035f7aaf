from pydantic import BaseModel

from wheel_analyzer.core.models import Event


class SpinIn(BaseModel):
    outcome: int


class HistoryOut(BaseModel):
    total: int
    items: list[Event]


class ClearOut(BaseModel):
    removed: int


class ImportOut(BaseModel):
    imported: int
