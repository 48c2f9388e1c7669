
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

from regs_insight.config import Settings
from regs_insight.db.session import Base, Database

logger = logging.getLogger(__name__)


def _load_models() -> None:
    from regs_insight.models import document, user  # noqa: F401


async def ensure_database(settings: Settings) -> bool:
    if settings.database_url:
        return True

    engine = create_async_engine(
        settings.server_url(),
        connect_args={"connect_timeout": settings.db_connect_timeout},
    )
    try:
        async with engine.connect() as conn:
            await conn.execute(
                text(
                    f"CREATE DATABASE IF NOT EXISTS `{settings.db_name}` "
                    "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
                )
            )
        logger.info("Database created or already exists: %s", settings.db_name)
        return True
    except Exception as e:
        # the running principal may lack the privilege; the database may already exist
        logger.error("Failed to create database %s: %s", settings.db_name, e)
        return False
    finally:
        await engine.dispose()


async def ensure_tables(database: Database) -> bool:
    _load_models()
    try:
        async with database.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except Exception as e:
        logger.error("Failed to ensure tables: %s", e)
        return False
    logger.info("Tables ensured.")
    return True


async def init_database(settings: Settings) -> Database | None:
    await ensure_database(settings)

    database = Database(
        settings.sqlalchemy_url(),
        pool_size=settings.db_pool_size,
        connect_timeout=settings.db_connect_timeout,
    )
    try:
        await database.ping()
    except Exception as e:
        logger.error("DB init error: %s", e)
        await database.dispose()
        return None

    logger.info("DB pool created and ping OK: %s", database.engine.url.render_as_string(hide_password=True))
    await ensure_tables(database)
    return database
