"""Section hierarchy management."""

from .service import SectionHierarchyService

__all__ = ["SectionHierarchyService"]
