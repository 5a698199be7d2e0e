"""Records for the section hierarchy: sections, units and contacts."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class Section(BaseModel):
    """A named grouping of refrigeration units and their contacts."""

    id: UUID
    name: str
    sort_order: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class Unit(BaseModel):
    """A single refrigeration unit. ``section_id`` never changes."""

    id: UUID
    section_id: UUID
    name: str
    sort_order: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class Contact(BaseModel):
    """A person responsible for a section.

    ``phone_number`` is kept exactly as entered; normalisation happens
    only when building call or message links.
    """

    id: UUID
    section_id: UUID
    name: str
    phone_number: str
    sort_order: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SectionTree(Section):
    """A section with its units and contacts, each in sort order."""

    units: list[Unit] = Field(default_factory=list)
    contacts: list[Contact] = Field(default_factory=list)


# =========================
# Request Models
# =========================


class SectionCreate(BaseModel):
    name: str


class SectionUpdate(BaseModel):
    name: str


class UnitCreate(BaseModel):
    name: str


class UnitUpdate(BaseModel):
    name: str


class ContactCreate(BaseModel):
    name: str
    phone_number: str


class ContactUpdate(BaseModel):
    name: str | None = None
    phone_number: str | None = None


class ContactLinks(BaseModel):
    """Call and message links for a contact."""

    contact_id: UUID
    phone: str
    tel_url: str
    whatsapp_url: str
