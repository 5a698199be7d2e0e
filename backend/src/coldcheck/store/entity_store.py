"""Entity store for sections, units, contacts, reports and entries.

Every public method runs in its own session and transaction, so a cascade
delete or a report insert is applied completely or not at all. The store
is handed an explicit session factory; it keeps no other state.
"""

from collections import defaultdict
from contextlib import asynccontextmanager
from datetime import date, datetime
from typing import AsyncGenerator, Callable, Sequence
from uuid import UUID, uuid4

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..errors import ConstraintViolation, NotFoundError
from ..models import (
    UNKNOWN,
    Contact,
    EntryInput,
    Report,
    ResolvedEntry,
    Section,
    SectionTree,
    TimeSlot,
    Unit,
)
from .tables import ContactRow, EntryRow, ReportRow, SectionRow, UnitRow


def _as_uuid(value: UUID | str, resource: str) -> UUID:
    """Coerce an id; a malformed id cannot resolve to anything."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        raise NotFoundError(resource, value)


class EntityStore:
    """Persistence for the section hierarchy and compliance reports."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        """Initialize the store.

        Args:
            session_factory: Factory producing sessions on the target database
            clock: Source of creation/update timestamps
        """
        self._session_factory = session_factory
        self._clock = clock

    @asynccontextmanager
    async def _transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Open a session with a transaction that commits on clean exit."""
        async with self._session_factory() as session:
            try:
                async with session.begin():
                    yield session
            except IntegrityError as exc:
                raise ConstraintViolation(f"Constraint violated: {exc.orig}") from exc

    async def _next_sort_order(
        self,
        session: AsyncSession,
        row_cls: type[SectionRow] | type[UnitRow] | type[ContactRow],
        section_id: UUID | None = None,
    ) -> int:
        stmt = select(func.max(row_cls.sort_order))
        if section_id is not None:
            stmt = stmt.where(row_cls.section_id == section_id)
        current = (await session.execute(stmt)).scalar_one_or_none()
        return 0 if current is None else current + 1

    async def _get_row(self, session: AsyncSession, row_cls, resource: str, entity_id):
        row = await session.get(row_cls, _as_uuid(entity_id, resource))
        if row is None:
            raise NotFoundError(resource, entity_id)
        return row

    # =========================
    # Sections
    # =========================

    async def insert_section(self, name: str) -> Section:
        async with self._transaction() as session:
            now = self._clock()
            row = SectionRow(
                id=uuid4(),
                name=name,
                sort_order=await self._next_sort_order(session, SectionRow),
                created_at=now,
                updated_at=now,
            )
            session.add(row)
            await session.flush()
            return Section.model_validate(row)

    async def get_section(self, section_id: UUID | str) -> Section:
        async with self._transaction() as session:
            row = await self._get_row(session, SectionRow, "Section", section_id)
            return Section.model_validate(row)

    async def list_sections(self) -> list[Section]:
        async with self._transaction() as session:
            result = await session.execute(
                select(SectionRow).order_by(SectionRow.sort_order, SectionRow.id)
            )
            return [Section.model_validate(row) for row in result.scalars()]

    async def list_section_trees(self) -> list[SectionTree]:
        """All sections with their units and contacts attached."""
        async with self._transaction() as session:
            sections = (
                await session.execute(
                    select(SectionRow).order_by(SectionRow.sort_order, SectionRow.id)
                )
            ).scalars().all()
            return await self._build_trees(session, sections)

    async def get_section_tree(self, section_id: UUID | str) -> SectionTree:
        async with self._transaction() as session:
            row = await self._get_row(session, SectionRow, "Section", section_id)
            trees = await self._build_trees(session, [row])
            return trees[0]

    async def _build_trees(
        self, session: AsyncSession, sections: Sequence[SectionRow]
    ) -> list[SectionTree]:
        ids = [s.id for s in sections]
        units: dict[UUID, list[Unit]] = defaultdict(list)
        contacts: dict[UUID, list[Contact]] = defaultdict(list)
        if ids:
            unit_rows = await session.execute(
                select(UnitRow)
                .where(UnitRow.section_id.in_(ids))
                .order_by(UnitRow.sort_order, UnitRow.id)
            )
            for row in unit_rows.scalars():
                units[row.section_id].append(Unit.model_validate(row))
            contact_rows = await session.execute(
                select(ContactRow)
                .where(ContactRow.section_id.in_(ids))
                .order_by(ContactRow.sort_order, ContactRow.id)
            )
            for row in contact_rows.scalars():
                contacts[row.section_id].append(Contact.model_validate(row))

        return [
            SectionTree(
                **Section.model_validate(s).model_dump(),
                units=units[s.id],
                contacts=contacts[s.id],
            )
            for s in sections
        ]

    async def update_section(self, section_id: UUID | str, name: str) -> Section:
        async with self._transaction() as session:
            row = await self._get_row(session, SectionRow, "Section", section_id)
            row.name = name
            row.updated_at = self._clock()
            await session.flush()
            return Section.model_validate(row)

    async def delete_section(self, section_id: UUID | str) -> tuple[int, int]:
        """Delete a section together with its units and contacts.

        Returns:
            Tuple of (units_removed, contacts_removed)
        """
        async with self._transaction() as session:
            row = await self._get_row(session, SectionRow, "Section", section_id)
            contacts = await session.execute(
                delete(ContactRow).where(ContactRow.section_id == row.id)
            )
            units = await session.execute(
                delete(UnitRow).where(UnitRow.section_id == row.id)
            )
            await session.delete(row)
            await session.flush()
            return units.rowcount, contacts.rowcount

    # =========================
    # Units
    # =========================

    async def insert_unit(self, section_id: UUID | str, name: str) -> Unit:
        async with self._transaction() as session:
            section = await self._get_row(session, SectionRow, "Section", section_id)
            now = self._clock()
            row = UnitRow(
                id=uuid4(),
                section_id=section.id,
                name=name,
                sort_order=await self._next_sort_order(session, UnitRow, section.id),
                created_at=now,
                updated_at=now,
            )
            session.add(row)
            await session.flush()
            return Unit.model_validate(row)

    async def get_unit(self, unit_id: UUID | str) -> Unit:
        async with self._transaction() as session:
            row = await self._get_row(session, UnitRow, "Unit", unit_id)
            return Unit.model_validate(row)

    async def list_units(self, section_id: UUID | str | None = None) -> list[Unit]:
        """Units of one section, or of all sections in hierarchy order."""
        async with self._transaction() as session:
            if section_id is not None:
                section = await self._get_row(session, SectionRow, "Section", section_id)
                stmt = (
                    select(UnitRow)
                    .where(UnitRow.section_id == section.id)
                    .order_by(UnitRow.sort_order, UnitRow.id)
                )
            else:
                stmt = (
                    select(UnitRow)
                    .join(SectionRow, UnitRow.section_id == SectionRow.id)
                    .order_by(
                        SectionRow.sort_order,
                        SectionRow.id,
                        UnitRow.sort_order,
                        UnitRow.id,
                    )
                )
            result = await session.execute(stmt)
            return [Unit.model_validate(row) for row in result.scalars()]

    async def update_unit(self, unit_id: UUID | str, name: str) -> Unit:
        async with self._transaction() as session:
            row = await self._get_row(session, UnitRow, "Unit", unit_id)
            row.name = name
            row.updated_at = self._clock()
            await session.flush()
            return Unit.model_validate(row)

    async def delete_unit(self, unit_id: UUID | str) -> None:
        """Delete a unit. Entries that name it are kept and resolve to Unknown."""
        async with self._transaction() as session:
            row = await self._get_row(session, UnitRow, "Unit", unit_id)
            await session.delete(row)

    # =========================
    # Contacts
    # =========================

    async def insert_contact(
        self, section_id: UUID | str, name: str, phone_number: str
    ) -> Contact:
        async with self._transaction() as session:
            section = await self._get_row(session, SectionRow, "Section", section_id)
            now = self._clock()
            row = ContactRow(
                id=uuid4(),
                section_id=section.id,
                name=name,
                phone_number=phone_number,
                sort_order=await self._next_sort_order(session, ContactRow, section.id),
                created_at=now,
                updated_at=now,
            )
            session.add(row)
            await session.flush()
            return Contact.model_validate(row)

    async def get_contact(self, contact_id: UUID | str) -> Contact:
        async with self._transaction() as session:
            row = await self._get_row(session, ContactRow, "Contact", contact_id)
            return Contact.model_validate(row)

    async def list_contacts(self, section_id: UUID | str | None = None) -> list[Contact]:
        async with self._transaction() as session:
            stmt = select(ContactRow)
            if section_id is not None:
                section = await self._get_row(session, SectionRow, "Section", section_id)
                stmt = stmt.where(ContactRow.section_id == section.id)
            stmt = stmt.order_by(ContactRow.sort_order, ContactRow.id)
            result = await session.execute(stmt)
            return [Contact.model_validate(row) for row in result.scalars()]

    async def update_contact(
        self,
        contact_id: UUID | str,
        name: str | None = None,
        phone_number: str | None = None,
    ) -> Contact:
        async with self._transaction() as session:
            row = await self._get_row(session, ContactRow, "Contact", contact_id)
            if name is not None:
                row.name = name
            if phone_number is not None:
                row.phone_number = phone_number
            row.updated_at = self._clock()
            await session.flush()
            return Contact.model_validate(row)

    async def delete_contact(self, contact_id: UUID | str) -> None:
        async with self._transaction() as session:
            row = await self._get_row(session, ContactRow, "Contact", contact_id)
            await session.delete(row)

    # =========================
    # Reports
    # =========================

    async def insert_report(
        self,
        report_date: date,
        time_slot: TimeSlot,
        submitter_name: str,
        remarks: str | None,
        submitted_by: str,
        entries: Sequence[EntryInput],
    ) -> Report:
        """Insert a report and its entries in one transaction.

        Raises:
            ConstraintViolation: If two entries name the same unit or an
                entry names a unit that does not exist
        """
        unit_ids = [entry.unit_id for entry in entries]
        if len(set(unit_ids)) != len(unit_ids):
            raise ConstraintViolation("A report may hold only one entry per unit")

        async with self._transaction() as session:
            if unit_ids:
                known = set(
                    (
                        await session.execute(
                            select(UnitRow.id).where(UnitRow.id.in_(unit_ids))
                        )
                    ).scalars()
                )
                missing = [str(u) for u in unit_ids if u not in known]
                if missing:
                    raise ConstraintViolation(
                        f"Entries reference unknown units: {', '.join(missing)}"
                    )

            now = self._clock()
            row = ReportRow(
                id=uuid4(),
                report_date=report_date,
                time_slot=time_slot.value,
                submitter_name=submitter_name,
                remarks=remarks,
                submitted_by=submitted_by,
                created_at=now,
            )
            session.add(row)
            await session.flush()

            session.add_all(
                EntryRow(
                    id=uuid4(),
                    report_id=row.id,
                    unit_id=entry.unit_id,
                    in_range=entry.in_range,
                    position=position,
                    created_at=now,
                )
                for position, entry in enumerate(entries)
            )
            await session.flush()

            reports = await self._resolve_reports(session, [row])
            return reports[0]

    async def get_report(self, report_id: UUID | str) -> Report:
        async with self._transaction() as session:
            row = await self._get_row(session, ReportRow, "Report", report_id)
            reports = await self._resolve_reports(session, [row])
            return reports[0]

    async def list_reports_for_date(self, report_date: date) -> list[Report]:
        """Reports of one calendar day, newest first."""
        async with self._transaction() as session:
            result = await session.execute(
                select(ReportRow)
                .where(ReportRow.report_date == report_date)
                .order_by(ReportRow.created_at.desc(), ReportRow.id.desc())
            )
            return await self._resolve_reports(session, result.scalars().all())

    async def delete_report(self, report_id: UUID | str) -> None:
        """Delete a report and all of its entries."""
        async with self._transaction() as session:
            row = await self._get_row(session, ReportRow, "Report", report_id)
            await session.execute(delete(EntryRow).where(EntryRow.report_id == row.id))
            await session.delete(row)

    async def _resolve_reports(
        self, session: AsyncSession, rows: Sequence[ReportRow]
    ) -> list[Report]:
        """Attach entries, with unit and section names, to report rows."""
        ids = [row.id for row in rows]
        entries: dict[UUID, list[ResolvedEntry]] = defaultdict(list)
        if ids:
            result = await session.execute(
                select(EntryRow, UnitRow.name, SectionRow.id, SectionRow.name)
                .outerjoin(UnitRow, EntryRow.unit_id == UnitRow.id)
                .outerjoin(SectionRow, UnitRow.section_id == SectionRow.id)
                .where(EntryRow.report_id.in_(ids))
                .order_by(EntryRow.position, EntryRow.id)
            )
            for entry, unit_name, section_id, section_name in result.all():
                entries[entry.report_id].append(
                    ResolvedEntry(
                        id=entry.id,
                        report_id=entry.report_id,
                        unit_id=entry.unit_id,
                        in_range=entry.in_range,
                        position=entry.position,
                        created_at=entry.created_at,
                        unit_name=unit_name if unit_name is not None else UNKNOWN,
                        section_id=section_id,
                        section_name=section_name if section_name is not None else UNKNOWN,
                    )
                )

        return [
            Report(
                id=row.id,
                report_date=row.report_date,
                time_slot=TimeSlot(row.time_slot),
                submitter_name=row.submitter_name,
                remarks=row.remarks,
                submitted_by=row.submitted_by,
                created_at=row.created_at,
                entries=entries[row.id],
            )
            for row in rows
        ]
