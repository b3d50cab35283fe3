import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.database.connection import Base, SessionLocal, engine
from app.models import model  # noqa: F401  registers the users table on Base.metadata
from app.repositories.settings import settings
from app.routers import system_router, user_router
from app.routers.error_handlers import register_error_handlers
from app.services.user_directory import UserDirectory
from app.version import __version__

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # stuff to do when app starts
    Base.metadata.create_all(bind=engine)
    app.state.directory = UserDirectory(session_factory=SessionLocal)
    logger.info(f"User directory ready (api version {__version__})")
    yield
    # stuff to do when app stops
    engine.dispose()


app = FastAPI(version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(user_router.user_Router)
app.include_router(system_router.system_Router)

if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=True,
    )
