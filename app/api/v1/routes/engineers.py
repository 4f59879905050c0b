from fastapi import APIRouter, status, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession
from app.domain.catalog.schemas import EngineerCreateDTO, EngineerReadDTO, EngineerPutDTO, EngineersQueryDTO
from app.core.dependencies.auth import require_staff, require_admin
from app.core.database import get_db
from app.core.pagination import PageDTO
from app.services import catalog_service
from typing import Annotated


router = APIRouter(prefix="/engineers", tags=["engineers"])
db_dependency = Annotated[AsyncSession, Depends(get_db)]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=EngineerReadDTO,
    dependencies=[Depends(require_admin)]
)
async def create_engineer(schema: EngineerCreateDTO, db: db_dependency, response: Response):
    engineer = await catalog_service.create_engineer(db, schema)
    response.headers["Location"] = f"{router.prefix}/{engineer.id}"
    return engineer


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=PageDTO[EngineerReadDTO],
    dependencies=[Depends(require_staff)]
)
async def list_engineers(db: db_dependency, query: Annotated[EngineersQueryDTO, Depends()]):
    return await catalog_service.list_engineers(db, query)


@router.get(
    "/{engineer_id}",
    status_code=status.HTTP_200_OK,
    response_model=EngineerReadDTO,
    dependencies=[Depends(require_staff)]
)
async def get_engineer(engineer_id: int, db: db_dependency):
    return await catalog_service.get_engineer(db, engineer_id)


@router.put(
    "/{engineer_id}",
    status_code=status.HTTP_200_OK,
    response_model=EngineerReadDTO,
    dependencies=[Depends(require_admin)]
)
async def update_engineer(engineer_id: int, schema: EngineerPutDTO, db: db_dependency):
    return await catalog_service.update_engineer(db, engineer_id, schema)


@router.delete("/{engineer_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
async def delete_engineer(engineer_id: int, db: db_dependency):
    await catalog_service.delete_engineer(db, engineer_id)
