"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It points settings at the testing environment and an in-memory database
before anything imports ``app.core.config``.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("DB_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("APP_RATE_LIMIT_ENABLED", "true")

from typing import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.adapters.generation.static import StaticVariantGenerator
from app.core.app_factory import create_app
from app.db.session import build_engine, get_db, init_db
from app.schemas.localization import CreateLocalizationRequest
from app.services.favorites_service import FavoritesService
from app.services.localization_service import LocalizationService


@pytest.fixture
def engine() -> Iterator[Engine]:
    """Fresh in-memory SQLite database with all tables created."""
    engine = build_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine: Engine) -> Iterator[Session]:
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    session = factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def localization_service(db_session: Session) -> LocalizationService:
    return LocalizationService(db_session, StaticVariantGenerator())


@pytest.fixture
def favorites_service(db_session: Session) -> FavoritesService:
    return FavoritesService(db_session)


@pytest.fixture
def make_payload():
    """Build a CreateLocalizationRequest with sensible defaults."""

    def _make(**overrides) -> CreateLocalizationRequest:
        data = {
            "original_name": "Emma",
            "target_language": "chinese",
            "gender_preference": "female",
            "output_format": "both",
            "tone": "modern",
            "user_id": None,
        }
        data.update(overrides)
        return CreateLocalizationRequest(**data)

    return _make


@pytest.fixture
def app(engine: Engine) -> FastAPI:
    """App instance whose sessions all come from the test database."""
    application = create_app()
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    def override_get_db() -> Iterator[Session]:
        session = factory()
        try:
            yield session
        finally:
            session.close()

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
