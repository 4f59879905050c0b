from fastapi import APIRouter, status, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession
from app.domain.service_reports.schemas import ServiceReportCreateDTO, ServiceReportReadDTO, ServiceReportPutDTO, \
    ServiceReportsQueryDTO
from app.core.dependencies.auth import require_staff, require_admin
from app.core.database import get_db
from app.core.pagination import PageDTO
from app.services import service_report_service
from typing import Annotated


router = APIRouter(prefix="/service-reports", tags=["service-reports"])
db_dependency = Annotated[AsyncSession, Depends(get_db)]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ServiceReportReadDTO,
    response_model_exclude_none=True,
    dependencies=[Depends(require_staff)]
)
async def create_service_report(schema: ServiceReportCreateDTO, db: db_dependency, response: Response):
    report = await service_report_service.create_service_report(db, schema)
    response.headers["Location"] = f"{router.prefix}/{report.id}"
    return report


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=PageDTO[ServiceReportReadDTO],
    response_model_exclude_none=True,
    dependencies=[Depends(require_staff)]
)
async def list_service_reports(db: db_dependency, query: Annotated[ServiceReportsQueryDTO, Depends()]):
    return await service_report_service.list_service_reports(db, query)


@router.get(
    "/{report_id}",
    status_code=status.HTTP_200_OK,
    response_model=ServiceReportReadDTO,
    response_model_exclude_none=True,
    dependencies=[Depends(require_staff)]
)
async def get_service_report(report_id: int, db: db_dependency):
    return await service_report_service.get_service_report(db, report_id)


@router.put(
    "/{report_id}",
    status_code=status.HTTP_200_OK,
    response_model=ServiceReportReadDTO,
    response_model_exclude_none=True,
    dependencies=[Depends(require_staff)]
)
async def update_service_report(report_id: int, schema: ServiceReportPutDTO, db: db_dependency):
    return await service_report_service.update_service_report(db, report_id, schema)


@router.delete("/{report_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
async def delete_service_report(report_id: int, db: db_dependency):
    await service_report_service.delete_service_report(db, report_id)
