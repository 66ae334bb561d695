# Run from project root: uvicorn app.main:app --reload

import logging

from fastapi import FastAPI

from app.api.routes import router
from app.core.config import Settings, load_settings, log_level_from_env

logging.basicConfig(level=log_level_from_env())


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app; settings are loaded once here unless injected."""
    application = FastAPI(title="Portfolio Question Relay")
    application.state.settings = settings or load_settings()
    application.include_router(router)
    return application


app = create_app()


if __name__ == "__main__":
    print("Question relay booting...")
