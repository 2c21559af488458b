"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.api import sim
from backend.core.logging_config import setup_logging
from backend.services.engine_config import get_engine_config

API_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging when the server starts."""
    config = get_engine_config()
    setup_logging(log_level=config.log_level, enable_file=config.log_to_file)
    yield


app = FastAPI(
    title="Deck Probability Calculator API",
    description="Hypergeometric draw probabilities for cards and card combinations",
    version=API_VERSION,
    lifespan=lifespan,
)

# CORS middleware for local frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_engine_config().cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(sim.router, prefix="/sim", tags=["simulation"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Deck Probability Calculator API",
        "version": API_VERSION,
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
