"""The Tortoise ORM setup for `atelier`."""

from tortoise import Tortoise, connections

from ..settings import settings
from .loguru_logging import logger

TORTOISE_APP_NAME = "atelier"
TORTOISE_MODELS_MODULES = ["atelier.models"]


def get_tortoise_config(db_url: str | None = None) -> dict:
    """Get the Tortoise ORM config. Uses the URL from the settings if `db_url` is not provided."""
    return {
        "connections": {"default": db_url or settings.database_url},
        "apps": {
            TORTOISE_APP_NAME: {
                "models": TORTOISE_MODELS_MODULES,
                "default_connection": "default",
            },
        },
        "use_tz": True,
        "timezone": "UTC",
    }


async def init_db(db_url: str | None = None, generate_schemas: bool = False):
    """Initialize the Tortoise ORM. Optionally create the tables (no migrations are involved)."""
    await Tortoise.init(config=get_tortoise_config(db_url))
    logger.info(f"Tortoise ORM initialized with the `{TORTOISE_APP_NAME}` app.")

    if generate_schemas:
        await Tortoise.generate_schemas(safe=True)
        logger.debug("Database schemas generated.")


async def close_db():
    """Close all the database connections."""
    await connections.close_all()
    logger.info("Database connections closed.")
