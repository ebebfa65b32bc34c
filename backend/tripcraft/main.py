import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.routes import destinations, weather

load_dotenv()


def _get_log_level() -> int:
    raw = (os.getenv("LOG_LEVEL") or "").strip().upper()
    level = logging.getLevelName(raw) if raw else logging.INFO
    # getLevelName() returns "Level X" strings for unknown names
    return level if isinstance(level, int) else logging.INFO


logging.basicConfig(
    level=_get_log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="TripCraft",
    version="0.1.0",
    description="Backend API for TripCraft – weather-aware trip planning.",
)

# ---- CORS (browser front end) ----

_origins = [o.strip() for o in (os.getenv("CORS_ORIGINS") or "*").split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.get("/health", tags=["health"])
def health_check():
    """
    Basic health check endpoint used for monitoring and deployment.
    """
    return JSONResponse(content={"status": "ok"})


# ---- API Routers ----

app.include_router(
    destinations.router,
    prefix="/api/destinations",
    tags=["destinations"],
)

app.include_router(
    weather.router,
    prefix="/api/destinations",
    tags=["weather"],
)
