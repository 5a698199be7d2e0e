"""Section hierarchy API endpoints: sections, units and contacts."""

from uuid import UUID

from fastapi import APIRouter, Response, status

from ..config import get_settings
from ..formatting import normalize_phone, tel_url, whatsapp_url
from ..models import (
    Contact,
    ContactCreate,
    ContactLinks,
    ContactUpdate,
    Section,
    SectionCreate,
    SectionTree,
    SectionUpdate,
    Unit,
    UnitCreate,
    UnitUpdate,
)
from .auth import CurrentUser
from .dependencies import HierarchyService

router = APIRouter()


# =========================
# Sections
# =========================


@router.get("/sections")
async def list_sections(service: HierarchyService, user: CurrentUser) -> list[SectionTree]:
    """List sections with their units and contacts, in sort order."""
    return await service.list_sections()


@router.post("/sections", status_code=status.HTTP_201_CREATED)
async def create_section(
    body: SectionCreate, service: HierarchyService, user: CurrentUser
) -> Section:
    return await service.add_section(body.name)


@router.get("/sections/{section_id}")
async def get_section(
    section_id: UUID, service: HierarchyService, user: CurrentUser
) -> SectionTree:
    return await service.get_section_tree(section_id)


@router.patch("/sections/{section_id}")
async def rename_section(
    section_id: UUID, body: SectionUpdate, service: HierarchyService, user: CurrentUser
) -> Section:
    return await service.rename_section(section_id, body.name)


@router.delete("/sections/{section_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_section(
    section_id: UUID, service: HierarchyService, user: CurrentUser
) -> Response:
    """Delete a section together with its units and contacts."""
    await service.remove_section(section_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =========================
# Units
# =========================


@router.post("/sections/{section_id}/units", status_code=status.HTTP_201_CREATED)
async def create_unit(
    section_id: UUID, body: UnitCreate, service: HierarchyService, user: CurrentUser
) -> Unit:
    return await service.add_unit(section_id, body.name)


@router.patch("/units/{unit_id}")
async def rename_unit(
    unit_id: UUID, body: UnitUpdate, service: HierarchyService, user: CurrentUser
) -> Unit:
    return await service.rename_unit(unit_id, body.name)


@router.delete("/units/{unit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_unit(unit_id: UUID, service: HierarchyService, user: CurrentUser) -> Response:
    await service.remove_unit(unit_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =========================
# Contacts
# =========================


@router.post("/sections/{section_id}/contacts", status_code=status.HTTP_201_CREATED)
async def create_contact(
    section_id: UUID, body: ContactCreate, service: HierarchyService, user: CurrentUser
) -> Contact:
    return await service.add_contact(section_id, body.name, body.phone_number)


@router.patch("/contacts/{contact_id}")
async def update_contact(
    contact_id: UUID, body: ContactUpdate, service: HierarchyService, user: CurrentUser
) -> Contact:
    return await service.update_contact(
        contact_id, name=body.name, phone_number=body.phone_number
    )


@router.delete("/contacts/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact(
    contact_id: UUID, service: HierarchyService, user: CurrentUser
) -> Response:
    await service.remove_contact(contact_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/contacts/{contact_id}/links")
async def get_contact_links(
    contact_id: UUID, service: HierarchyService, user: CurrentUser
) -> ContactLinks:
    """Call and WhatsApp links for a contact's phone number."""
    contact = await service.get_contact(contact_id)
    country_code = get_settings().phone_country_code
    return ContactLinks(
        contact_id=contact.id,
        phone=normalize_phone(contact.phone_number, country_code),
        tel_url=tel_url(contact.phone_number, country_code),
        whatsapp_url=whatsapp_url(contact.phone_number, country_code),
    )
