from fastapi import APIRouter, status, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession
from app.domain.companies.schemas import CompanyCreateDTO, CompanyReadDTO, CompanyPutDTO, CompaniesQueryDTO
from app.core.dependencies.auth import require_staff, require_admin
from app.core.database import get_db
from app.core.pagination import PageDTO
from app.services import company_service
from typing import Annotated


router = APIRouter(prefix="/companies", tags=["companies"])
db_dependency = Annotated[AsyncSession, Depends(get_db)]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CompanyReadDTO,
    response_model_exclude_none=True,
    dependencies=[Depends(require_staff)]
)
async def create_company(schema: CompanyCreateDTO, db: db_dependency, response: Response):
    company = await company_service.create_company(db, schema)
    response.headers["Location"] = f"{router.prefix}/{company.id}"
    return company


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=PageDTO[CompanyReadDTO],
    response_model_exclude_none=True,
    dependencies=[Depends(require_staff)]
)
async def list_companies(db: db_dependency, query: Annotated[CompaniesQueryDTO, Depends()]):
    return await company_service.list_companies(db, query)


@router.get(
    "/{company_id}",
    status_code=status.HTTP_200_OK,
    response_model=CompanyReadDTO,
    response_model_exclude_none=True,
    dependencies=[Depends(require_staff)]
)
async def get_company(company_id: int, db: db_dependency):
    return await company_service.get_company(db, company_id)


@router.put(
    "/{company_id}",
    status_code=status.HTTP_200_OK,
    response_model=CompanyReadDTO,
    response_model_exclude_none=True,
    dependencies=[Depends(require_staff)]
)
async def update_company(company_id: int, schema: CompanyPutDTO, db: db_dependency):
    return await company_service.update_company(db, company_id, schema)


@router.delete("/{company_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
async def delete_company(company_id: int, db: db_dependency):
    await company_service.delete_company(db, company_id)
