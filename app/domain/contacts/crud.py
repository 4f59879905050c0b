from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.pagination import paginate, search_clause, sort_clause
from .models import ContactPerson

SORTABLE = {
    "first_name": ContactPerson.first_name,
    "last_name": ContactPerson.last_name,
    "designation": ContactPerson.designation,
}


async def get_contact_person_by_id(db: AsyncSession, contact_id: int) -> ContactPerson | None:
    stmt = select(ContactPerson).where(ContactPerson.id == contact_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def list_contact_persons(
        db: AsyncSession,
        page: int,
        page_size: int,
        *,
        company_id: int | None = None,
        q: str | None = None,
        sort_by: str | None = None,
        sort_dir: str = "asc"
) -> tuple[list[ContactPerson], int]:
    where = []
    if company_id is not None:
        where.append(ContactPerson.company_id == company_id)
    search = search_clause(
        q, ContactPerson.first_name, ContactPerson.last_name, ContactPerson.email, ContactPerson.designation
    )
    if search is not None:
        where.append(search)

    items, total = await paginate(
        db,
        base_stmt=select(ContactPerson),
        page=page,
        page_size=page_size,
        where=where,
        order_by=[*sort_clause(SORTABLE, sort_by, sort_dir, "last_name"), ContactPerson.id],
    )
    return list(items), total


async def create_contact_person(db: AsyncSession, data: dict) -> ContactPerson:
    contact = ContactPerson(**data)
    db.add(contact)
    return contact


async def update_contact_person(contact: ContactPerson, data: dict) -> ContactPerson:
    for k, v in data.items():
        setattr(contact, k, v)
    return contact


async def delete_contact_person(db: AsyncSession, contact: ContactPerson) -> None:
    await db.delete(contact)
