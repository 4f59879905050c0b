from anyio import to_thread
from fastapi import APIRouter, status, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession
from app.domain.certificates.schemas import CertificateCreateDTO, CertificateReadDTO, CertificatePutDTO, \
    CertificatesQueryDTO
from app.core.dependencies.auth import require_staff, require_admin
from app.core.database import get_db
from app.core.pagination import PageDTO
from app.services import certificate_service
from app.services.certificate_pdf import render_certificate_pdf, certificate_pdf_filename
from typing import Annotated


router = APIRouter(prefix="/certificates", tags=["certificates"])
db_dependency = Annotated[AsyncSession, Depends(get_db)]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CertificateReadDTO,
    response_model_exclude_none=True,
    dependencies=[Depends(require_staff)]
)
async def create_certificate(schema: CertificateCreateDTO, db: db_dependency, response: Response):
    certificate = await certificate_service.create_certificate(db, schema)
    response.headers["Location"] = f"{router.prefix}/{certificate.id}"
    return certificate


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=PageDTO[CertificateReadDTO],
    response_model_exclude_none=True,
    dependencies=[Depends(require_staff)]
)
async def list_certificates(db: db_dependency, query: Annotated[CertificatesQueryDTO, Depends()]):
    return await certificate_service.list_certificates(db, query)


@router.get(
    "/{certificate_id}",
    status_code=status.HTTP_200_OK,
    response_model=CertificateReadDTO,
    response_model_exclude_none=True,
    dependencies=[Depends(require_staff)]
)
async def get_certificate(certificate_id: int, db: db_dependency):
    return await certificate_service.get_certificate(db, certificate_id)


@router.get(
    "/{certificate_id}/pdf",
    status_code=status.HTTP_200_OK,
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
    dependencies=[Depends(require_staff)]
)
async def get_certificate_pdf(certificate_id: int, db: db_dependency):
    certificate = await certificate_service.get_certificate(db, certificate_id)
    content = await to_thread.run_sync(render_certificate_pdf, certificate)
    filename = certificate_pdf_filename(certificate)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.put(
    "/{certificate_id}",
    status_code=status.HTTP_200_OK,
    response_model=CertificateReadDTO,
    response_model_exclude_none=True,
    dependencies=[Depends(require_staff)]
)
async def update_certificate(certificate_id: int, schema: CertificatePutDTO, db: db_dependency):
    return await certificate_service.update_certificate(db, certificate_id, schema)


@router.delete("/{certificate_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
async def delete_certificate(certificate_id: int, db: db_dependency):
    await certificate_service.delete_certificate(db, certificate_id)
