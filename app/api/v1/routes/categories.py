from fastapi import APIRouter, status, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession
from app.domain.catalog.schemas import CategoryCreateDTO, CategoryReadDTO, CategoryPutDTO, CategoriesQueryDTO
from app.core.dependencies.auth import require_staff, require_admin
from app.core.database import get_db
from app.core.pagination import PageDTO
from app.services import catalog_service
from typing import Annotated


router = APIRouter(prefix="/categories", tags=["categories"])
db_dependency = Annotated[AsyncSession, Depends(get_db)]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CategoryReadDTO,
    dependencies=[Depends(require_admin)]
)
async def create_category(schema: CategoryCreateDTO, db: db_dependency, response: Response):
    category = await catalog_service.create_category(db, schema)
    response.headers["Location"] = f"{router.prefix}/{category.id}"
    return category


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=PageDTO[CategoryReadDTO],
    dependencies=[Depends(require_staff)]
)
async def list_categories(db: db_dependency, query: Annotated[CategoriesQueryDTO, Depends()]):
    return await catalog_service.list_categories(db, query)


@router.get(
    "/{category_id}",
    status_code=status.HTTP_200_OK,
    response_model=CategoryReadDTO,
    dependencies=[Depends(require_staff)]
)
async def get_category(category_id: int, db: db_dependency):
    return await catalog_service.get_category(db, category_id)


@router.put(
    "/{category_id}",
    status_code=status.HTTP_200_OK,
    response_model=CategoryReadDTO,
    dependencies=[Depends(require_admin)]
)
async def update_category(category_id: int, schema: CategoryPutDTO, db: db_dependency):
    return await catalog_service.update_category(db, category_id, schema)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
async def delete_category(category_id: int, db: db_dependency):
    await catalog_service.delete_category(db, category_id)
