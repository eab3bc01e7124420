"""
FastAPI application for Poker Night.

The app serves the single-table HTTP API. Any front end is hosted
separately, so cross-origin requests are allowed.
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pokernight import __version__
from pokernight.config import get_settings
from pokernight.server.routes import router

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the app with CORS and the table routes."""
    application = FastAPI(
        title="Poker Night",
        description="Texas Hold'em against computer opponents",
        version=__version__,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    application.include_router(router)

    logger.info(
        f"Poker Night {__version__} ready: opponents default to {settings.default_mode.value}"
        + (f" ({settings.llm_model})" if settings.api_key else "")
    )
    return application


app = create_app()


def main():
    """Console entry point: serve on all interfaces, port 8000."""
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
