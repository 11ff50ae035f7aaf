from fastapi import APIRouter, Depends, HTTPException, Header, Request
from fastapi.responses import PlainTextResponse
from sqlmodel import Session
from wheel_analyzer.db.base import get_session
from wheel_analyzer.api.schemas import SpinIn, HistoryOut, ClearOut, ImportOut
from wheel_analyzer.core.models import AnalysisResult, Event
from wheel_analyzer.services import (
    record_spin, undo_last, clear_history, load_history, get_analysis,
    export_history, import_history,
)
from wheel_analyzer.config import settings

router = APIRouter()


def _auth(api_key_header: str | None = Header(default=None, alias="X-API-Key")):
    if settings.api_key and api_key_header != settings.api_key:
        raise HTTPException(status_code=401, detail="Invalid API key")


@router.get('/spins', response_model=HistoryOut)
async def spins(session: Session = Depends(get_session)):
    items = load_history(session)
    return {'total': len(items), 'items': items}


@router.post('/spins', response_model=Event)
async def add_spin(data: SpinIn, session: Session = Depends(get_session), ok=Depends(_auth)):
    try:
        return record_spin(session, data.outcome)
    except ValueError as exc:
        raise HTTPException(400, detail=str(exc))


@router.delete('/spins/last', response_model=Event)
async def undo(session: Session = Depends(get_session), ok=Depends(_auth)):
    e = undo_last(session)
    if e is None:
        raise HTTPException(404, detail="history is empty")
    return e


@router.delete('/spins', response_model=ClearOut)
async def clear(session: Session = Depends(get_session), ok=Depends(_auth)):
    return {'removed': clear_history(session)}


@router.get('/analysis', response_model=AnalysisResult)
async def analysis(
    recent_spins_window: int | None = None,
    hot_threshold: float | None = None,
    cold_threshold: float | None = None,
    frequency_weight: float | None = None,
    hot_cold_weight: float | None = None,
    trend_weight: float | None = None,
    session: Session = Depends(get_session),
):
    if recent_spins_window is not None and recent_spins_window < 1:
        raise HTTPException(400, detail="recent_spins_window must be >= 1")
    config = settings.analysis_config(
        recent_spins_window=recent_spins_window,
        hot_threshold=hot_threshold,
        cold_threshold=cold_threshold,
        frequency_weight=frequency_weight,
        hot_cold_weight=hot_cold_weight,
        trend_weight=trend_weight,
    )
    return get_analysis(session, config)


@router.get('/export', response_class=PlainTextResponse)
async def export(session: Session = Depends(get_session)):
    return PlainTextResponse(export_history(session), media_type="application/json")


@router.post('/import', response_model=ImportOut)
async def import_(request: Request, session: Session = Depends(get_session), ok=Depends(_auth)):
    payload = (await request.body()).decode("utf-8", errors="replace")
    if not import_history(session, payload):
        raise HTTPException(400, detail="payload must be JSON with a history list")
    return {'imported': len(load_history(session))}
