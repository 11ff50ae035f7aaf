from pathlib import Path
import os

import requests
import typer

from wheel_analyzer.analytics.engine import analyze
from wheel_analyzer.core.models import AnalysisResult
from wheel_analyzer.services import parse_history
from wheel_analyzer.config import configure_logging, settings

app = typer.Typer()
BASE = os.getenv("API_BASE", "http://127.0.0.1:8000")
API_KEY = os.getenv("API_KEY")


def _headers():
    h = {}
    if API_KEY:
        h["X-API-Key"] = API_KEY
    return h


def render(result: AnalysisResult) -> str:
    lines = [f"spins: {result.total_spins}"]
    for stats, score in zip(result.outcome_statistics, result.probability_scores):
        flag = " hot" if stats.is_hot else " cold" if stats.is_cold else ""
        lines.append(
            f"{stats.outcome:>3}  {stats.count:>4} ({stats.percentage:5.1f}%)  "
            f"p={score.probability:5.1f}{flag}"
        )
    for i, rec in enumerate(result.recommendations, 1):
        lines.append(f"#{i} {rec.outcome} ({rec.probability:.1f}, conf {rec.confidence:.2f}): {rec.reason}")
    return "\n".join(lines)


def _check_window(window: int | None):
    if window is not None and window < 1:
        typer.echo("--window must be >= 1", err=True)
        raise typer.Exit(1)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v")):
    configure_logging("DEBUG" if verbose else None)


@app.command()
def add(outcome: int):
    r = requests.post(f"{BASE}/spins", json={"outcome": outcome}, headers=_headers())
    typer.echo(r.json())


@app.command()
def undo():
    r = requests.delete(f"{BASE}/spins/last", headers=_headers())
    typer.echo(r.json())


@app.command()
def clear():
    r = requests.delete(f"{BASE}/spins", headers=_headers())
    typer.echo(r.json())


@app.command("analyze")
def analyze_remote(window: int = typer.Option(None, help="trailing window for hot/cold")):
    _check_window(window)
    params = {"recent_spins_window": window} if window is not None else {}
    r = requests.get(f"{BASE}/analysis", params=params, headers=_headers())
    if r.status_code != 200:
        typer.echo(r.json())
        raise typer.Exit(1)
    typer.echo(render(AnalysisResult.model_validate(r.json())))


@app.command()
def export(out: Path = typer.Option(None)):
    r = requests.get(f"{BASE}/export", headers=_headers())
    if out:
        out.write_text(r.text, encoding="utf-8")
        typer.echo(f"saved to {out}")
    else:
        typer.echo(r.text)


@app.command("import")
def import_cmd(path: Path):
    r = requests.post(f"{BASE}/import", data=path.read_text(encoding="utf-8"),
                      headers={**_headers(), "Content-Type": "application/json"})
    typer.echo(r.json())


@app.command()
def analyze_file(path: Path, window: int = typer.Option(None), as_json: bool = typer.Option(False, "--json")):
    """Analyze an exported history file locally, without the API."""
    _check_window(window)
    events = parse_history(path.read_text(encoding="utf-8"))
    if events is None:
        typer.echo(f"{path}: not a history export", err=True)
        raise typer.Exit(1)
    result = analyze(events, settings.analysis_config(recent_spins_window=window))
    if as_json:
        typer.echo(result.model_dump_json(indent=2))
    else:
        typer.echo(render(result))


if __name__ == "__main__":
    app()
