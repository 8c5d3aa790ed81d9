"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Test Database Configuration:
    Tests use an in-memory SQLite database through aiosqlite. Each test
    gets a fresh engine, so no state leaks between tests.
"""

import io
from collections.abc import AsyncGenerator

import pytest
from PIL import Image
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from argument.models.base import Base

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Create an in-memory test database engine with the note tables.

    StaticPool keeps the single in-memory connection alive for the
    whole test.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the test engine."""
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(
    db_session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a database session for a single test.

    Usage:
        async def test_create_note(db_session: AsyncSession):
            note = Note.create(title="Test")
            db_session.add(note)
            await db_session.flush()
    """
    async with db_session_factory() as session:
        yield session
        await session.rollback()


# =============================================================================
# Image Fixtures
# =============================================================================


def make_image_bytes(
    size: tuple[int, int] = (32, 24),
    mode: str = "RGB",
    color: tuple[int, ...] = (200, 40, 40),
    fmt: str = "PNG",
) -> bytes:
    """Encode a solid-colour image in memory."""
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    """A small valid PNG."""
    return make_image_bytes()


@pytest.fixture
def rgba_png_bytes() -> bytes:
    """A small PNG with an alpha channel."""
    return make_image_bytes(mode="RGBA", color=(10, 120, 200, 128))


@pytest.fixture
def corrupt_image_bytes() -> bytes:
    """Bytes that look nothing like an image."""
    return b"definitely not an image \x00\x01\x02"


@pytest.fixture
def image_bytes_factory():
    """Factory for encoded test images of a given size, mode and format."""
    return make_image_bytes
