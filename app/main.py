from fastapi import FastAPI

from app.config import settings
from app.logs import setup_logging
from app.scoring.router import router as scoring_router

setup_logging(settings.log_format, settings.log_level)

app = FastAPI(title="HabitScore", version="0.1.0")
app.include_router(scoring_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "scoring": {
            "goals_defaults": "/scoring/goals/defaults",
            "goals_normalize": "/scoring/goals/normalize",
            "goals_options": "/scoring/goals/options",
            "presets": "/scoring/presets",
            "presets_detail": "/scoring/presets/{id}",
            "presets_apply": "/scoring/presets/{id}/apply",
            "week_window": "/scoring/week-window",
            "penalty": "/scoring/penalty",
            "score": "/scoring/score",
            "recompute": "/scoring/users/{user_id}/days/{date}/recompute",
            "streak": "/scoring/users/{user_id}/streak",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
