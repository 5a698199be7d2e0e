"""Pytest fixtures shared by the coldcheck test suite.

Every test gets its own in-memory SQLite database through aiosqlite.
"""

from dataclasses import dataclass
from uuid import UUID

import pytest
import pytest_asyncio
from sqlalchemy.pool import StaticPool

from coldcheck.db import create_engine, create_session_factory, init_models
from coldcheck.hierarchy import SectionHierarchyService
from coldcheck.reports import ReportIngestionService, ReportQueryEngine
from coldcheck.store import EntityStore

from fixtures.hierarchy import SAMPLE_CONTACTS, SAMPLE_SECTIONS, StepClock


# =========================
# Database Fixtures
# =========================


@pytest_asyncio.fixture
async def engine():
    """In-memory database shared by all sessions of one test."""
    engine = create_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def store(session_factory, clock) -> EntityStore:
    return EntityStore(session_factory, clock=clock)


# =========================
# Service Fixtures
# =========================


@pytest.fixture
def hierarchy(store) -> SectionHierarchyService:
    return SectionHierarchyService(store)


@pytest.fixture
def ingestion(store) -> ReportIngestionService:
    return ReportIngestionService(store)


@pytest.fixture
def query_engine(store) -> ReportQueryEngine:
    return ReportQueryEngine(store)


# =========================
# Seeded Data
# =========================


@dataclass
class Kitchen:
    """Ids of the seeded sample layout."""

    sections: dict[str, UUID]
    units: dict[str, UUID]
    contacts: dict[str, UUID]


@pytest_asyncio.fixture
async def kitchen(hierarchy) -> Kitchen:
    """Seed the sample sections, units and contacts."""
    seeded = Kitchen(sections={}, units={}, contacts={})
    for layout in SAMPLE_SECTIONS:
        section = await hierarchy.add_section(layout["name"])
        seeded.sections[section.name] = section.id
        for unit_name in layout["units"]:
            unit = await hierarchy.add_unit(section.id, unit_name)
            seeded.units[unit.name] = unit.id
        for contact_name, phone in SAMPLE_CONTACTS[layout["name"]]:
            contact = await hierarchy.add_contact(section.id, contact_name, phone)
            seeded.contacts[contact.name] = contact.id
    return seeded


# =========================
# API Fixtures
# =========================


@pytest.fixture
def auth_headers() -> dict[str, str]:
    from coldcheck.api.auth import User, create_access_token

    token = create_access_token(User(id="user-1", email="ali@example.com", name="Ali"))
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def api_client(store):
    """HTTP client against the app, wired to the test database."""
    from httpx import ASGITransport, AsyncClient

    from coldcheck.api.dependencies import get_entity_store
    from main import app

    app.dependency_overrides[get_entity_store] = lambda: store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
