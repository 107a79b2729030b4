"""Database session dependency."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from codemart.infrastructure.database.session import session_scope


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """One session per request, committed after the handler returns."""
    async with session_scope() as session:
        yield session
