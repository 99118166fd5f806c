"""
create_tables.py
----------------
One-shot script to create all database tables and seed the default data.
Use this for quick setup. For production migrations, use Alembic instead.

Usage:
    python create_tables.py
"""

import asyncio

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from boutique.core.config import settings
from boutique.core.logging import configure_logging, get_logger
from boutique.models import Base  # Imports all models so metadata is populated
from boutique.services.bootstrap import seed_default_data

logger = get_logger(__name__)


async def create_all_tables() -> None:
    configure_logging()
    engine = create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("All tables created", tables=sorted(Base.metadata.tables))

    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        async with session.begin():
            await seed_default_data(session)
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(create_all_tables())
