"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from synapse.api.game import router as game_router
from synapse.api.health import router as health_router
from synapse.api.sessions import SessionRegistry
from synapse.config import settings
from synapse.core.logging import get_logger, setup_logging
from synapse.db.database import engine as db_engine
from synapse.db.models import Base

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    # DB 테이블 생성
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=db_engine)
    logger.info("Database tables created.")

    yield

    # 종료 시 정리
    logger.info("Shutting down... (%d sessions dropped)", len(app.state.sessions))
    app.state.sessions.clear()


app = FastAPI(title="SYNAPSE", lifespan=lifespan)

# session_id → SynapseEngine
app.state.sessions = SessionRegistry()

app.include_router(health_router)
app.include_router(game_router)
