"""Integration tests for SectionHierarchyService."""

from uuid import uuid4

import pytest

from coldcheck.errors import NotFoundError, ValidationError
from coldcheck.models import NAME_MAX_LENGTH, PHONE_MAX_LENGTH


class TestHierarchyService:
    """Tests for SectionHierarchyService."""

    @pytest.mark.asyncio
    async def test_names_are_trimmed_and_required(self, hierarchy):
        section = await hierarchy.add_section("  Kitchen  ")
        assert section.name == "Kitchen"

        with pytest.raises(ValidationError):
            await hierarchy.add_section("   ")
        with pytest.raises(ValidationError):
            await hierarchy.add_unit(section.id, "")

    @pytest.mark.asyncio
    async def test_rename(self, hierarchy, kitchen):
        unit = await hierarchy.rename_unit(kitchen.units["Fridge 01"], "Walk-in")
        section = await hierarchy.rename_section(kitchen.sections["Bar"], "Front Bar")

        assert unit.name == "Walk-in"
        assert unit.section_id == kitchen.sections["Kitchen"]
        assert section.name == "Front Bar"

    @pytest.mark.asyncio
    async def test_phone_stored_verbatim(self, hierarchy, kitchen):
        contact = await hierarchy.add_contact(kitchen.sections["Bar"], "Ben", " 012 999-0000 ")
        assert contact.phone_number == " 012 999-0000 "

        with pytest.raises(ValidationError):
            await hierarchy.add_contact(kitchen.sections["Bar"], "Ben", "  ")

    @pytest.mark.asyncio
    async def test_update_contact(self, hierarchy, kitchen):
        contact_id = kitchen.contacts["Aisyah"]

        updated = await hierarchy.update_contact(contact_id, phone_number="019-111 2222")
        assert updated.name == "Aisyah"
        assert updated.phone_number == "019-111 2222"

        with pytest.raises(ValidationError):
            await hierarchy.update_contact(contact_id)

    @pytest.mark.asyncio
    async def test_remove_section_removes_children(self, hierarchy, kitchen):
        await hierarchy.remove_section(kitchen.sections["Kitchen"])

        sections = await hierarchy.list_sections()
        assert [s.name for s in sections] == ["Bar"]
        assert await hierarchy.list_contacts() == []
        with pytest.raises(NotFoundError):
            await hierarchy.get_contact(kitchen.contacts["Aisyah"])

    @pytest.mark.asyncio
    async def test_missing_ids(self, hierarchy):
        with pytest.raises(NotFoundError):
            await hierarchy.rename_section(uuid4(), "x")
        with pytest.raises(NotFoundError):
            await hierarchy.remove_unit(uuid4())
        with pytest.raises(NotFoundError):
            await hierarchy.remove_contact(uuid4())

    @pytest.mark.asyncio
    async def test_overlong_values_rejected(self, hierarchy, kitchen):
        section_id = kitchen.sections["Bar"]

        with pytest.raises(ValidationError) as exc_info:
            await hierarchy.add_section("x" * (NAME_MAX_LENGTH + 1))
        assert exc_info.value.field == "name"

        with pytest.raises(ValidationError):
            await hierarchy.rename_unit(kitchen.units["Chiller A"], "x" * (NAME_MAX_LENGTH + 1))

        with pytest.raises(ValidationError) as exc_info:
            await hierarchy.add_contact(section_id, "Ben", "1" * (PHONE_MAX_LENGTH + 1))
        assert exc_info.value.field == "phone_number"

        unit = await hierarchy.add_unit(section_id, "y" * NAME_MAX_LENGTH)
        assert len(unit.name) == NAME_MAX_LENGTH
