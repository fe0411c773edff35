import os

# Must be set before `atelier` is imported: the settings and the logging are configured on import
os.environ.setdefault("ATELIER__DO_USE_FILE_LOGS", "false")
os.environ.setdefault("ATELIER__DATABASE_URL", "sqlite://:memory:")
os.environ.setdefault("ATELIER__FILES_BASE_URL", "https://cdn.example.com")

from typing import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from atelier.models import User, Work  # noqa: E402
from atelier.toolkit.file_storage import LocalFileStorage  # noqa: E402
from atelier.toolkit.tortoise_orm import close_db, init_db  # noqa: E402


@pytest.fixture
def storage(tmp_path) -> LocalFileStorage:
    """A local storage rooted at a temporary directory."""
    return LocalFileStorage(base_url="https://cdn.example.com", storage_root=tmp_path)


@pytest_asyncio.fixture
async def db() -> AsyncGenerator[None, None]:
    """A fresh in-memory database with all the tables created."""
    await init_db(generate_schemas=True)
    yield
    await close_db()


@pytest_asyncio.fixture
async def user(db) -> User:
    return await User.create(
        email="ada@example.com",
        password="pbkdf2_sha256$hash",
        name="Ada Lovelace",
        nickname="ada",
    )


@pytest_asyncio.fixture
async def work(user: User) -> Work:
    return await Work.create(
        title="Analytical Engine",
        file_url="https://cdn.example.com/uploads/engine.png",
        user=user,
    )
