"""
Diff Playground Backend - FastAPI Application Entry Point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from diffplay import __version__
from diffplay.logging_utils import configure_logging
from diffplay.routers import config, diff
from diffplay.services.config_manager import ConfigManager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown logic"""
    configure_logging()
    logger.info("Starting diff playground backend...")
    config_manager = ConfigManager.get_instance()
    logger.info("ConfigManager initialized from %s", config_manager.config_file)

    yield
    logger.info("Shutting down diff playground backend...")


app = FastAPI(
    title="Diff Playground Backend",
    description="Line and word level diffs for split and unified views",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware for the browser playground
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(diff.router, prefix="/api/diff", tags=["diff"])
app.include_router(config.router, prefix="/api/config", tags=["config"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "diffplay-backend"}


def run() -> None:
    """Console entry point"""
    import uvicorn

    server = ConfigManager.get_instance().get("server", {})
    uvicorn.run(app, host=server.get("host", "127.0.0.1"), port=server.get("port", 8000))


if __name__ == "__main__":
    run()
