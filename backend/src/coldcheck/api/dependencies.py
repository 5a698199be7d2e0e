"""FastAPI dependencies wiring the core services to the request scope.

Tests override ``get_entity_store`` to point the whole API at their own
database.
"""

from typing import Annotated

from fastapi import Depends

from ..config import get_settings
from ..db import get_session_factory
from ..hierarchy import SectionHierarchyService
from ..reports import ReportIngestionService, ReportQueryEngine
from ..store import EntityStore


def get_entity_store() -> EntityStore:
    return EntityStore(get_session_factory())


def get_hierarchy_service(
    store: EntityStore = Depends(get_entity_store),
) -> SectionHierarchyService:
    return SectionHierarchyService(store)


def get_ingestion_service(
    store: EntityStore = Depends(get_entity_store),
) -> ReportIngestionService:
    return ReportIngestionService(store)


def get_query_engine(
    store: EntityStore = Depends(get_entity_store),
) -> ReportQueryEngine:
    return ReportQueryEngine(store, max_days=get_settings().max_range_days)


HierarchyService = Annotated[SectionHierarchyService, Depends(get_hierarchy_service)]
IngestionService = Annotated[ReportIngestionService, Depends(get_ingestion_service)]
QueryEngine = Annotated[ReportQueryEngine, Depends(get_query_engine)]
