# tracker/main.py
import time
import logging
import uuid
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from tracker.routers.players import router as players_router
from tracker.routers.lifts import router as lifts_router
from tracker.routers.exercises import router as exercises_router
from tracker.routers.workouts import router as workouts_router
from tracker.routers.stats import router as stats_router
from tracker.db import SessionLocal  # for healthz DB check
from tracker.settings import get_settings

log = logging.getLogger("uvicorn")
settings = get_settings()

app = FastAPI(
    title="Basketball Tracker API",
    openapi_tags=[
        {"name": "players", "description": "Team roster"},
        {"name": "lifts", "description": "Single-exercise lifts and lift history"},
        {"name": "exercises", "description": "Exercise library"},
        {"name": "workouts", "description": "Lifting workouts with sets"},
        {"name": "stats", "description": "Shooting statistics, summaries and leaderboards"},
    ],
)


# CORS (relax for local dev; tighten origins in prod via env)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

@app.exception_handler(RequestValidationError)
async def validation_error_as_400(request: Request, exc: RequestValidationError):
    # 400 with one line per violation, like a model-state error list
    errors = [
        {
            "field": ".".join(str(p) for p in err["loc"] if p not in ("body", "query", "path")),
            "message": err["msg"],
        }
        for err in exc.errors()
    ]
    log.info("validation failed %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": errors},
    )

@app.get("/")
def root():
    return {"ok": True, "name": "Basketball Tracker API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/healthz")
def healthz():
    # Quick DB sanity check
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"status": "ok"}
    except Exception as e:
        return {"status": "degraded", "error": str(e)}

@app.get("/version")
def version():
    return {"version": settings.API_VERSION}

# Routers
app.include_router(players_router)
app.include_router(lifts_router)
app.include_router(exercises_router)
app.include_router(workouts_router)
app.include_router(stats_router)
