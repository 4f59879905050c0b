from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.auditing import AuditSpan
from app.core.pagination import PageDTO
from app.domain.service_reports import crud
from app.domain.service_reports.models import ServiceReport
from app.domain.service_reports.schemas import ServiceReportCreateDTO, ServiceReportPutDTO, ServiceReportsQueryDTO, \
    ServiceReportReadDTO
from app.domain.exceptions import NotFound, Conflict


async def get_service_report(db: AsyncSession, report_id: int) -> ServiceReport:
    report = await crud.get_service_report_by_id(db, report_id)
    if not report:
        raise NotFound("Service report not found", ctx={"report_id": report_id})
    return report


async def list_service_reports(db: AsyncSession, query: ServiceReportsQueryDTO) -> PageDTO[ServiceReportReadDTO]:
    reports, total = await crud.list_service_reports(
        db,
        query.page,
        query.page_size,
        q=query.q,
        date_from=query.date_from,
        date_to=query.date_to,
        sort_by=query.sort_by,
        sort_dir=query.sort_dir,
    )
    items = [ServiceReportReadDTO.model_validate(r) for r in reports]
    return PageDTO[ServiceReportReadDTO](items=items, total=total, page=query.page, page_size=query.page_size)


async def create_service_report(db: AsyncSession, schema: ServiceReportCreateDTO) -> ServiceReport:
    async with AuditSpan(scope="SERVICE_REPORTS", action="CREATE", object_type="service_report") as span:
        report = await crud.create_service_report(db, schema.model_dump())
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("Report number already exists", ctx={"report_no": schema.report_no}) from e
        span.object_id = report.id
        return report


async def update_service_report(db: AsyncSession, report_id: int, schema: ServiceReportPutDTO) -> ServiceReport:
    async with AuditSpan(scope="SERVICE_REPORTS", action="UPDATE", object_type="service_report", object_id=report_id):
        report = await get_service_report(db, report_id)
        report = await crud.update_service_report(report, schema.model_dump())
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("Report number already exists", ctx={"report_no": schema.report_no}) from e
        return report


async def delete_service_report(db: AsyncSession, report_id: int) -> None:
    async with AuditSpan(scope="SERVICE_REPORTS", action="DELETE", object_type="service_report", object_id=report_id):
        report = await get_service_report(db, report_id)
        await crud.delete_service_report(db, report)
        await db.flush()
