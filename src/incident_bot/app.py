"""FastAPI application with lifespan and health endpoint."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from incident_bot.config import get_settings
from incident_bot.logging_config import configure_logging
from incident_bot.slack.client import build_chat_clients
from incident_bot.slack.router import router as slack_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging, load config and build chat clients once."""
    settings = get_settings()
    configure_logging(settings.log_level)
    app.state.settings = settings
    app.state.chat_clients = build_chat_clients(settings)
    yield


app = FastAPI(
    title="Incident Bot",
    lifespan=lifespan,
)
app.include_router(slack_router)


@app.get("/health")
async def health():
    """Health check endpoint for Cloud Run and local development."""
    return {
        "status": "ok",
        "service": "incident-bot",
        "version": "0.1.0",
    }
