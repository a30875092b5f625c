"""
FastAPI main application
QuizHub - Live contest event server

Routers in quizhub/api/:
- health.py: Health check and system status
- admin.py: Coordinator controls (start round, clear submissions, leaderboard toggles)
- submission.py: Student poll, answer submission, judge marking
- team.py: Team registration and listing
- leaderboard.py: Ranked leaderboard per round

All routers reach the shared EventServices through app.state.
"""
import logging
import os
import time
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from quizhub.api import admin, health, leaderboard, submission, team
from quizhub.api.error_handlers import register_error_handlers
from quizhub.config import Settings, load_settings
from quizhub.state import EventServices


logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    services: EventServices = app.state.services
    try:
        services.load()
        logger.info(
            f"✅ Server started with {len(services.teams)} teams and "
            f"{len(services.submissions)} submissions"
        )
    except Exception as e:
        logger.error(f"❌ Failed to load persisted state: {e}")
        raise

    yield

    logger.info("🛑 Server shutting down")


def create_app(
    settings: Optional[Settings] = None,
    clock: Callable[[], float] = time.time,
) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="QuizHub - Contest Server",
        description="Timed live-quiz rounds, team submissions, judging and leaderboards",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.services = EventServices(settings, clock=clock)

    # CORS middleware (allow all origins, viewers poll from anywhere)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # ==================== INCLUDE ROUTERS ====================

    app.include_router(health.router)
    app.include_router(admin.router)
    app.include_router(submission.router)
    app.include_router(team.router)
    app.include_router(leaderboard.router)

    # ==================== STATIC FILES ====================

    if os.path.isdir(settings.static_dir):
        app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")

    return app


app = create_app()


# ==================== RUN SERVER ====================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=app.state.services.settings.host, port=app.state.services.settings.port)
