from sqlalchemy.ext.asyncio import AsyncSession
from app.core.auditing import AuditSpan
from app.core.pagination import PageDTO
from app.domain.companies import crud
from app.domain.companies.models import Company
from app.domain.companies.schemas import CompanyCreateDTO, CompanyPutDTO, CompaniesQueryDTO, CompanyReadDTO
from app.domain.exceptions import NotFound


async def get_company(db: AsyncSession, company_id: int) -> Company:
    company = await crud.get_company_by_id(db, company_id)
    if not company:
        raise NotFound("Company not found", ctx={"company_id": company_id})
    return company


async def list_companies(db: AsyncSession, query: CompaniesQueryDTO) -> PageDTO[CompanyReadDTO]:
    companies, total = await crud.list_companies(
        db, query.page, query.page_size, q=query.q, sort_by=query.sort_by, sort_dir=query.sort_dir
    )
    items = [CompanyReadDTO.model_validate(company) for company in companies]
    return PageDTO[CompanyReadDTO](
        items=items,
        total=total,
        page=query.page,
        page_size=query.page_size
    )


async def create_company(db: AsyncSession, schema: CompanyCreateDTO) -> Company:
    fields = list(schema.model_dump(exclude_none=True).keys())
    async with AuditSpan(
        scope="COMPANIES",
        action="CREATE",
        object_type="company",
        meta={"fields": fields}
    ) as span:
        company = await crud.create_company(db, schema.model_dump(exclude_none=True))
        await db.flush()
        span.object_id = company.id
        return company


async def update_company(db: AsyncSession, company_id: int, schema: CompanyPutDTO) -> Company:
    async with AuditSpan(
        scope="COMPANIES",
        action="UPDATE",
        object_type="company",
        object_id=company_id,
        meta={"fields": list(schema.model_dump(exclude_none=True).keys())}
    ):
        company = await get_company(db, company_id)
        company = await crud.update_company(company, schema.model_dump())
        await db.flush()
        return company


async def delete_company(db: AsyncSession, company_id: int) -> None:
    async with AuditSpan(scope="COMPANIES", action="DELETE", object_type="company", object_id=company_id):
        company = await get_company(db, company_id)
        await crud.delete_company(db, company)
        await db.flush()
