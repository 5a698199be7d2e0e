"""Section hierarchy service.

Administrative CRUD over sections, their refrigeration units and their
responsible contacts. Creates append to the end of the parent's sort
order; deletes are unconditional (confirmation belongs to the caller).
"""

import logging
from uuid import UUID

from ..errors import ValidationError
from ..logging import log_hierarchy_change
from ..models import (
    PHONE_MAX_LENGTH,
    Contact,
    Section,
    SectionTree,
    Unit,
    require_text,
)
from ..store import EntityStore

logger = logging.getLogger(__name__)


class SectionHierarchyService:
    """Manages sections, units and contacts."""

    def __init__(self, store: EntityStore):
        self._store = store

    # =========================
    # Sections
    # =========================

    async def add_section(self, name: str) -> Section:
        section = await self._store.insert_section(require_text(name, "name"))
        log_hierarchy_change("created", "section", str(section.id))
        return section

    async def rename_section(self, section_id: UUID | str, name: str) -> Section:
        section = await self._store.update_section(section_id, require_text(name, "name"))
        log_hierarchy_change("renamed", "section", str(section.id))
        return section

    async def remove_section(self, section_id: UUID | str) -> None:
        """Delete a section with all of its units and contacts."""
        units, contacts = await self._store.delete_section(section_id)
        logger.info(
            f"Removed section {section_id} with {units} units and {contacts} contacts"
        )
        log_hierarchy_change("deleted", "section", str(section_id))

    async def list_sections(self) -> list[SectionTree]:
        return await self._store.list_section_trees()

    async def get_section_tree(self, section_id: UUID | str) -> SectionTree:
        return await self._store.get_section_tree(section_id)

    # =========================
    # Units
    # =========================

    async def add_unit(self, section_id: UUID | str, name: str) -> Unit:
        unit = await self._store.insert_unit(section_id, require_text(name, "name"))
        log_hierarchy_change("created", "unit", str(unit.id), str(unit.section_id))
        return unit

    async def rename_unit(self, unit_id: UUID | str, name: str) -> Unit:
        unit = await self._store.update_unit(unit_id, require_text(name, "name"))
        log_hierarchy_change("renamed", "unit", str(unit.id), str(unit.section_id))
        return unit

    async def remove_unit(self, unit_id: UUID | str) -> None:
        await self._store.delete_unit(unit_id)
        log_hierarchy_change("deleted", "unit", str(unit_id))

    async def list_units(self, section_id: UUID | str | None = None) -> list[Unit]:
        return await self._store.list_units(section_id)

    # =========================
    # Contacts
    # =========================

    async def add_contact(
        self, section_id: UUID | str, name: str, phone_number: str
    ) -> Contact:
        contact = await self._store.insert_contact(
            section_id,
            require_text(name, "name"),
            _require_phone(phone_number),
        )
        log_hierarchy_change("created", "contact", str(contact.id), str(contact.section_id))
        return contact

    async def update_contact(
        self,
        contact_id: UUID | str,
        name: str | None = None,
        phone_number: str | None = None,
    ) -> Contact:
        if name is None and phone_number is None:
            raise ValidationError("Nothing to update: give a name or a phone number")
        contact = await self._store.update_contact(
            contact_id,
            name=require_text(name, "name") if name is not None else None,
            phone_number=_require_phone(phone_number) if phone_number is not None else None,
        )
        log_hierarchy_change("updated", "contact", str(contact.id), str(contact.section_id))
        return contact

    async def remove_contact(self, contact_id: UUID | str) -> None:
        await self._store.delete_contact(contact_id)
        log_hierarchy_change("deleted", "contact", str(contact_id))

    async def get_contact(self, contact_id: UUID | str) -> Contact:
        return await self._store.get_contact(contact_id)

    async def list_contacts(self, section_id: UUID | str | None = None) -> list[Contact]:
        return await self._store.list_contacts(section_id)


def _require_phone(phone_number: str | None) -> str:
    # Stored verbatim; blank or overlong input is rejected.
    if phone_number is None or not phone_number.strip():
        raise ValidationError("phone_number must not be empty", field="phone_number")
    if len(phone_number) > PHONE_MAX_LENGTH:
        raise ValidationError(
            f"phone_number must be at most {PHONE_MAX_LENGTH} characters",
            field="phone_number",
        )
    return phone_number
