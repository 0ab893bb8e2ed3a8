"""Shared pytest fixtures for faultline test suites."""

from collections.abc import Generator
from datetime import datetime
from datetime import timezone
from pathlib import Path
import os
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Must be set before faultline.db.base builds its engine.
os.environ.setdefault("FAULTLINE_DATABASE_URL", "sqlite+pysqlite:///:memory:")

from faultline.core.config import DEFAULT_MESSAGES_DIR  # noqa: E402
from faultline.handling.translator import ErrorTranslator  # noqa: E402
from faultline.i18n.catalog import MessageCatalog  # noqa: E402

FIXED_NOW = datetime(2026, 1, 15, 12, 30, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def catalog() -> MessageCatalog:
    """Load the packaged message catalog once per session."""
    return MessageCatalog.from_directory(DEFAULT_MESSAGES_DIR, default_locale="en")


@pytest.fixture
def translator(catalog: MessageCatalog) -> ErrorTranslator:
    """Provide a translator with a frozen clock."""
    return ErrorTranslator(catalog, clock=lambda: FIXED_NOW)


@pytest.fixture
def client(translator: ErrorTranslator) -> Generator:
    """Provide an API client backed by an isolated in-memory SQLite database."""
    from fastapi.testclient import TestClient
    from sqlalchemy import create_engine
    from sqlalchemy.orm import Session
    from sqlalchemy.orm import sessionmaker
    from sqlalchemy.pool import StaticPool

    from faultline.db.base import Base
    from faultline.db.base import get_db_session
    from faultline.main import create_app

    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    testing_session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, class_=Session)

    def override_get_db_session() -> Generator[Session, None, None]:
        session = testing_session()
        try:
            yield session
        finally:
            session.close()

    app = create_app(translator=translator)
    app.dependency_overrides[get_db_session] = override_get_db_session

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    engine.dispose()
