"""CLI commands for managing sections, units and contacts."""

import click

from ..formatting import normalize_phone, tel_url, whatsapp_url
from ..hierarchy import SectionHierarchyService
from ._common import echo_json, run_with_store


@click.group("section")
def section_group() -> None:
    """Manage sections."""
    pass


@section_group.command("add")
@click.argument("name")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def add_section(name: str, as_json: bool) -> None:
    """Create a section at the end of the list."""

    async def _add(store) -> None:
        section = await SectionHierarchyService(store).add_section(name)
        if as_json:
            echo_json(section.model_dump(mode="json"))
        else:
            click.echo(f"Created section: {section.id}")
            click.echo(f"  Name: {section.name}")

    run_with_store(_add)


@section_group.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_sections(as_json: bool) -> None:
    """List sections with their units and contacts."""

    async def _list(store) -> None:
        sections = await SectionHierarchyService(store).list_sections()
        if as_json:
            echo_json([s.model_dump(mode="json") for s in sections])
            return

        click.echo(f"Sections ({len(sections)} total):")
        for section in sections:
            click.echo("")
            click.echo(f"  {section.name} ({section.id})")
            for unit in section.units:
                click.echo(f"    - {unit.name} ({unit.id})")
            if not section.units:
                click.echo("    No units in this section")
            for contact in section.contacts:
                click.echo(f"    * {contact.name}: {contact.phone_number}")

    run_with_store(_list)


@section_group.command("rename")
@click.argument("section_id")
@click.argument("name")
def rename_section(section_id: str, name: str) -> None:
    """Rename a section."""

    async def _rename(store) -> None:
        section = await SectionHierarchyService(store).rename_section(section_id, name)
        click.echo(f"Renamed section {section.id} to {section.name}")

    run_with_store(_rename)


@section_group.command("remove")
@click.argument("section_id")
@click.option("--yes", is_flag=True, help="Skip confirmation")
def remove_section(section_id: str, yes: bool) -> None:
    """Delete a section with all of its units and contacts."""
    if not yes:
        click.confirm(
            "This deletes the section with all of its units and contacts. Continue?",
            abort=True,
        )

    async def _remove(store) -> None:
        await SectionHierarchyService(store).remove_section(section_id)
        click.echo(f"Removed section: {section_id}")

    run_with_store(_remove)


@click.group("unit")
def unit_group() -> None:
    """Manage refrigeration units."""
    pass


@unit_group.command("add")
@click.argument("section_id")
@click.argument("name")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def add_unit(section_id: str, name: str, as_json: bool) -> None:
    """Add a unit at the end of a section."""

    async def _add(store) -> None:
        unit = await SectionHierarchyService(store).add_unit(section_id, name)
        if as_json:
            echo_json(unit.model_dump(mode="json"))
        else:
            click.echo(f"Created unit: {unit.id}")
            click.echo(f"  Name: {unit.name}")
            click.echo(f"  Section: {unit.section_id}")

    run_with_store(_add)


@unit_group.command("rename")
@click.argument("unit_id")
@click.argument("name")
def rename_unit(unit_id: str, name: str) -> None:
    """Rename a unit."""

    async def _rename(store) -> None:
        unit = await SectionHierarchyService(store).rename_unit(unit_id, name)
        click.echo(f"Renamed unit {unit.id} to {unit.name}")

    run_with_store(_rename)


@unit_group.command("remove")
@click.argument("unit_id")
@click.option("--yes", is_flag=True, help="Skip confirmation")
def remove_unit(unit_id: str, yes: bool) -> None:
    """Delete a unit. Past report entries show it as Unknown."""
    if not yes:
        click.confirm("Delete this unit?", abort=True)

    async def _remove(store) -> None:
        await SectionHierarchyService(store).remove_unit(unit_id)
        click.echo(f"Removed unit: {unit_id}")

    run_with_store(_remove)


@click.group("contact")
def contact_group() -> None:
    """Manage section contacts."""
    pass


@contact_group.command("add")
@click.argument("section_id")
@click.option("--name", "-n", required=True, help="Contact name")
@click.option("--phone", "-p", required=True, help="Phone number as written")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def add_contact(section_id: str, name: str, phone: str, as_json: bool) -> None:
    """Add a contact to a section."""

    async def _add(store) -> None:
        contact = await SectionHierarchyService(store).add_contact(section_id, name, phone)
        if as_json:
            echo_json(contact.model_dump(mode="json"))
        else:
            click.echo(f"Created contact: {contact.id}")
            click.echo(f"  Name: {contact.name}")
            click.echo(f"  Phone: {contact.phone_number}")

    run_with_store(_add)


@contact_group.command("update")
@click.argument("contact_id")
@click.option("--name", "-n", default=None, help="New name")
@click.option("--phone", "-p", default=None, help="New phone number")
def update_contact(contact_id: str, name: str | None, phone: str | None) -> None:
    """Change a contact's name or phone number."""

    async def _update(store) -> None:
        contact = await SectionHierarchyService(store).update_contact(
            contact_id, name=name, phone_number=phone
        )
        click.echo(f"Updated contact {contact.id}: {contact.name}, {contact.phone_number}")

    run_with_store(_update)


@contact_group.command("remove")
@click.argument("contact_id")
@click.option("--yes", is_flag=True, help="Skip confirmation")
def remove_contact(contact_id: str, yes: bool) -> None:
    """Delete a contact."""
    if not yes:
        click.confirm("Delete this contact?", abort=True)

    async def _remove(store) -> None:
        await SectionHierarchyService(store).remove_contact(contact_id)
        click.echo(f"Removed contact: {contact_id}")

    run_with_store(_remove)


@contact_group.command("link")
@click.argument("contact_id")
def contact_link(contact_id: str) -> None:
    """Print call and WhatsApp links for a contact."""

    async def _link(store) -> None:
        contact = await SectionHierarchyService(store).get_contact(contact_id)
        click.echo(f"{contact.name}: {normalize_phone(contact.phone_number)}")
        click.echo(f"  Call: {tel_url(contact.phone_number)}")
        click.echo(f"  WhatsApp: {whatsapp_url(contact.phone_number)}")

    run_with_store(_link)
