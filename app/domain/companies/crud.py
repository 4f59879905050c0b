from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.pagination import paginate, search_clause, sort_clause
from .models import Company

SORTABLE = {
    "company_name": Company.company_name,
    "industries": Company.industries,
    "industries_type": Company.industries_type,
    "created_at": Company.created_at,
}


async def get_company_by_id(db: AsyncSession, company_id: int) -> Company | None:
    stmt = select(Company).where(Company.id == company_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def list_companies(
        db: AsyncSession,
        page: int,
        page_size: int,
        *,
        q: str | None = None,
        sort_by: str | None = None,
        sort_dir: str = "desc"
) -> tuple[list[Company], int]:
    where = []
    search = search_clause(q, Company.company_name, Company.gst_number, Company.industries, Company.address)
    if search is not None:
        where.append(search)

    items, total = await paginate(
        db,
        base_stmt=select(Company),
        page=page,
        page_size=page_size,
        where=where,
        order_by=[*sort_clause(SORTABLE, sort_by, sort_dir, "created_at"), Company.id],
    )
    return list(items), total


async def create_company(db: AsyncSession, data: dict) -> Company:
    company = Company(**data)
    db.add(company)
    return company


async def update_company(company: Company, data: dict) -> Company:
    for k, v in data.items():
        setattr(company, k, v)
    return company


async def delete_company(db: AsyncSession, company: Company) -> None:
    await db.delete(company)
