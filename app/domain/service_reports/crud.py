from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.pagination import paginate, search_clause, sort_clause
from .models import ServiceReport

SORTABLE = {
    "name_and_location": ServiceReport.name_and_location,
    "service_engineer": ServiceReport.service_engineer,
    "date": ServiceReport.date,
    "report_no": ServiceReport.report_no,
    "created_at": ServiceReport.created_at,
}


async def get_service_report_by_id(db: AsyncSession, report_id: int) -> ServiceReport | None:
    stmt = select(ServiceReport).where(ServiceReport.id == report_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def list_service_reports(
        db: AsyncSession,
        page: int,
        page_size: int,
        *,
        q: str | None = None,
        date_from=None,
        date_to=None,
        sort_by: str | None = None,
        sort_dir: str = "desc"
) -> tuple[list[ServiceReport], int]:
    where = []
    search = search_clause(
        q,
        ServiceReport.name_and_location,
        ServiceReport.contact_person,
        ServiceReport.service_engineer,
        ServiceReport.report_no,
        ServiceReport.engineer_name,
    )
    if search is not None:
        where.append(search)
    if date_from is not None:
        where.append(ServiceReport.date >= date_from)
    if date_to is not None:
        where.append(ServiceReport.date <= date_to)

    items, total = await paginate(
        db,
        base_stmt=select(ServiceReport),
        page=page,
        page_size=page_size,
        where=where,
        order_by=[*sort_clause(SORTABLE, sort_by, sort_dir, "created_at"), ServiceReport.id],
    )
    return list(items), total


async def create_service_report(db: AsyncSession, data: dict) -> ServiceReport:
    report = ServiceReport(**data)
    db.add(report)
    return report


async def update_service_report(report: ServiceReport, data: dict) -> ServiceReport:
    for k, v in data.items():
        setattr(report, k, v)
    return report


async def delete_service_report(db: AsyncSession, report: ServiceReport) -> None:
    await db.delete(report)
