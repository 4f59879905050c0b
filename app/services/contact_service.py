from sqlalchemy.ext.asyncio import AsyncSession
from app.core.auditing import AuditSpan
from app.core.pagination import PageDTO
from app.domain.contacts import crud
from app.domain.contacts.models import ContactPerson
from app.domain.contacts.schemas import ContactPersonCreateDTO, ContactPersonPutDTO, ContactPersonsQueryDTO, \
    ContactPersonReadDTO
from app.domain.exceptions import NotFound
from app.services.company_service import get_company


async def get_contact_person(db: AsyncSession, contact_id: int) -> ContactPerson:
    contact = await crud.get_contact_person_by_id(db, contact_id)
    if not contact:
        raise NotFound("Contact person not found", ctx={"contact_id": contact_id})
    return contact


async def list_contact_persons(db: AsyncSession, query: ContactPersonsQueryDTO) -> PageDTO[ContactPersonReadDTO]:
    contacts, total = await crud.list_contact_persons(
        db,
        query.page,
        query.page_size,
        company_id=query.company_id,
        q=query.q,
        sort_by=query.sort_by,
        sort_dir=query.sort_dir,
    )
    items = [ContactPersonReadDTO.model_validate(c) for c in contacts]
    return PageDTO[ContactPersonReadDTO](items=items, total=total, page=query.page, page_size=query.page_size)


async def create_contact_person(db: AsyncSession, schema: ContactPersonCreateDTO) -> ContactPerson:
    async with AuditSpan(
        scope="CONTACTS",
        action="CREATE",
        object_type="contact_person",
        meta={"company_id": schema.company_id}
    ) as span:
        await get_company(db, schema.company_id)
        contact = await crud.create_contact_person(db, schema.model_dump())
        await db.flush()
        await db.refresh(contact, attribute_names=["company"])
        span.object_id = contact.id
        return contact


async def update_contact_person(db: AsyncSession, contact_id: int, schema: ContactPersonPutDTO) -> ContactPerson:
    async with AuditSpan(scope="CONTACTS", action="UPDATE", object_type="contact_person", object_id=contact_id):
        contact = await get_contact_person(db, contact_id)
        if schema.company_id != contact.company_id:
            await get_company(db, schema.company_id)
        contact = await crud.update_contact_person(contact, schema.model_dump())
        await db.flush()
        await db.refresh(contact, attribute_names=["company"])
        return contact


async def delete_contact_person(db: AsyncSession, contact_id: int) -> None:
    async with AuditSpan(scope="CONTACTS", action="DELETE", object_type="contact_person", object_id=contact_id):
        contact = await get_contact_person(db, contact_id)
        await crud.delete_contact_person(db, contact)
        await db.flush()
