from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import CERTIFICATE_COUNTER_KEY
from app.core.pagination import paginate, search_clause, sort_clause
from .counters import certificate_counters
from .models import Certificate

SORTABLE = {
    "certificate_no": Certificate.certificate_no,
    "customer_name": Certificate.customer_name,
    "site_location": Certificate.site_location,
    "make_model": Certificate.make_model,
    "serial_no": Certificate.serial_no,
    "engineer_name": Certificate.engineer_name,
    "date_of_calibration": Certificate.date_of_calibration,
    "created_at": Certificate.created_at,
}


async def next_counter_value(db: AsyncSession, counter_id: str = CERTIFICATE_COUNTER_KEY) -> int:
    row = await db.execute(
        insert(certificate_counters)
        .values(id=counter_id, last_number=1)
        .on_conflict_do_update(
            index_elements=[certificate_counters.c.id],
            set_={"last_number": certificate_counters.c.last_number + 1},
        )
        .returning(certificate_counters.c.last_number)
    )
    return row.scalar_one()


async def store_generated_label(db: AsyncSession, label: str, counter_id: str = CERTIFICATE_COUNTER_KEY) -> None:
    await db.execute(
        update(certificate_counters)
        .where(certificate_counters.c.id == counter_id)
        .values(generated_label=label)
    )


async def reset_counter(db: AsyncSession, counter_id: str = CERTIFICATE_COUNTER_KEY) -> None:
    await db.execute(
        update(certificate_counters)
        .where(certificate_counters.c.id == counter_id)
        .values(last_number=0, generated_label=None)
    )


async def get_counter(db: AsyncSession, counter_id: str = CERTIFICATE_COUNTER_KEY):
    row = await db.execute(
        select(certificate_counters.c.last_number, certificate_counters.c.generated_label)
        .where(certificate_counters.c.id == counter_id)
    )
    return row.first()


async def get_certificate_by_id(db: AsyncSession, certificate_id: int) -> Certificate | None:
    stmt = select(Certificate).where(Certificate.id == certificate_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def list_certificates(
        db: AsyncSession,
        page: int,
        page_size: int,
        *,
        q: str | None = None,
        date_from=None,
        date_to=None,
        engineer_name: str | None = None,
        status: str | None = None,
        sort_by: str | None = None,
        sort_dir: str = "desc"
) -> tuple[list[Certificate], int]:
    where = []
    search = search_clause(
        q,
        Certificate.certificate_no,
        Certificate.customer_name,
        Certificate.site_location,
        Certificate.make_model,
        Certificate.serial_no,
        Certificate.engineer_name,
    )
    if search is not None:
        where.append(search)
    if date_from is not None:
        where.append(Certificate.date_of_calibration >= date_from)
    if date_to is not None:
        where.append(Certificate.date_of_calibration <= date_to)
    if engineer_name:
        where.append(Certificate.engineer_name.ilike(engineer_name))
    if status:
        where.append(Certificate.status == status)

    items, total = await paginate(
        db,
        base_stmt=select(Certificate),
        page=page,
        page_size=page_size,
        where=where,
        order_by=[*sort_clause(SORTABLE, sort_by, sort_dir, "created_at"), Certificate.id],
    )
    return list(items), total


async def create_certificate(db: AsyncSession, data: dict) -> Certificate:
    certificate = Certificate(**data)
    db.add(certificate)
    return certificate


async def update_certificate(certificate: Certificate, data: dict) -> Certificate:
    for k, v in data.items():
        setattr(certificate, k, v)
    return certificate


async def delete_certificate(db: AsyncSession, certificate: Certificate) -> None:
    await db.delete(certificate)
