from fastapi import APIRouter, status, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession
from app.domain.contacts.schemas import ContactPersonCreateDTO, ContactPersonReadDTO, ContactPersonPutDTO, \
    ContactPersonsQueryDTO
from app.core.dependencies.auth import require_staff, require_admin
from app.core.database import get_db
from app.core.pagination import PageDTO
from app.services import contact_service
from typing import Annotated


router = APIRouter(prefix="/contact-persons", tags=["contact-persons"])
db_dependency = Annotated[AsyncSession, Depends(get_db)]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ContactPersonReadDTO,
    response_model_exclude_none=True,
    dependencies=[Depends(require_staff)]
)
async def create_contact_person(schema: ContactPersonCreateDTO, db: db_dependency, response: Response):
    contact = await contact_service.create_contact_person(db, schema)
    response.headers["Location"] = f"{router.prefix}/{contact.id}"
    return contact


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=PageDTO[ContactPersonReadDTO],
    response_model_exclude_none=True,
    dependencies=[Depends(require_staff)]
)
async def list_contact_persons(db: db_dependency, query: Annotated[ContactPersonsQueryDTO, Depends()]):
    return await contact_service.list_contact_persons(db, query)


@router.get(
    "/{contact_id}",
    status_code=status.HTTP_200_OK,
    response_model=ContactPersonReadDTO,
    response_model_exclude_none=True,
    dependencies=[Depends(require_staff)]
)
async def get_contact_person(contact_id: int, db: db_dependency):
    return await contact_service.get_contact_person(db, contact_id)


@router.put(
    "/{contact_id}",
    status_code=status.HTTP_200_OK,
    response_model=ContactPersonReadDTO,
    response_model_exclude_none=True,
    dependencies=[Depends(require_staff)]
)
async def update_contact_person(contact_id: int, schema: ContactPersonPutDTO, db: db_dependency):
    return await contact_service.update_contact_person(db, contact_id, schema)


@router.delete("/{contact_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
async def delete_contact_person(contact_id: int, db: db_dependency):
    await contact_service.delete_contact_person(db, contact_id)
