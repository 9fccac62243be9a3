import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from .config import load_settings
from .routes.generate import router as generate_router
from .routes.health import router as health_router
from .utils import configure_logging


def create_app() -> FastAPI:
    # Load environment variables from .env if present
    if os.getenv("DOTENV_DISABLED", "false").lower() not in {"1", "true", "yes"}:
        load_dotenv()

    configure_logging(os.getenv("LOG_LEVEL", "INFO"))
    settings = load_settings()

    app = FastAPI(title="Recipe Generator Proxy", version="1.0.0")

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_origins != ["*"],
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(health_router, prefix="/api")
    app.include_router(generate_router, prefix="/api")

    return app
