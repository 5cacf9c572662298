"""ASGI entrypoint: uvicorn micropost.main:app. No business logic; only wiring."""

from dotenv import load_dotenv

load_dotenv()

import logging

from micropost.app import create_app
from micropost.core.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)

app = create_app(settings)
