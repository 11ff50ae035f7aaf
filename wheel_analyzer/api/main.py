from fastapi import FastAPI
from contextlib import asynccontextmanager
from wheel_analyzer.config import configure_logging
from wheel_analyzer.db.base import init_db
from wheel_analyzer.api.routes import router


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    init_db()
    yield

app = FastAPI(title="Wheel Analyzer", lifespan=lifespan)
app.include_router(router)


@app.get("/")
def home():
    return {"ok": True, "app": "Wheel Analyzer"}
