from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.auditing import AuditSpan
from app.core.pagination import PageDTO
from app.domain.certificates import crud
from app.domain.certificates.models import Certificate
from app.domain.certificates.schemas import CertificateCreateDTO, CertificatePutDTO, CertificatesQueryDTO, \
    CertificateReadDTO
from app.domain.exceptions import NotFound, Conflict
from app.services.certificate_number_service import generate_certificate_number


async def get_certificate(db: AsyncSession, certificate_id: int) -> Certificate:
    certificate = await crud.get_certificate_by_id(db, certificate_id)
    if not certificate:
        raise NotFound("Certificate not found", ctx={"certificate_id": certificate_id})
    return certificate


async def list_certificates(db: AsyncSession, query: CertificatesQueryDTO) -> PageDTO[CertificateReadDTO]:
    certificates, total = await crud.list_certificates(
        db,
        query.page,
        query.page_size,
        q=query.q,
        date_from=query.date_from,
        date_to=query.date_to,
        engineer_name=query.engineer_name,
        status=query.status,
        sort_by=query.sort_by,
        sort_dir=query.sort_dir,
    )
    items = [CertificateReadDTO.model_validate(c) for c in certificates]
    return PageDTO[CertificateReadDTO](items=items, total=total, page=query.page, page_size=query.page_size)


async def create_certificate(db: AsyncSession, schema: CertificateCreateDTO) -> Certificate:
    data = schema.model_dump()
    async with AuditSpan(scope="CERTIFICATES", action="CREATE", object_type="certificate") as span:
        if not data.get("certificate_no"):
            data["certificate_no"] = await generate_certificate_number(db)
            span.meta["minted"] = True

        certificate = await crud.create_certificate(db, data)
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("Certificate number already exists", ctx={"certificate_no": data["certificate_no"]}) from e

        span.object_id = certificate.id
        span.meta["certificate_no"] = certificate.certificate_no
        return certificate


async def update_certificate(db: AsyncSession, certificate_id: int, schema: CertificatePutDTO) -> Certificate:
    async with AuditSpan(
        scope="CERTIFICATES",
        action="UPDATE",
        object_type="certificate",
        object_id=certificate_id
    ):
        certificate = await get_certificate(db, certificate_id)
        certificate = await crud.update_certificate(certificate, schema.model_dump())
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("Certificate number already exists", ctx={"certificate_no": schema.certificate_no}) from e
        return certificate


async def delete_certificate(db: AsyncSession, certificate_id: int) -> None:
    async with AuditSpan(
        scope="CERTIFICATES",
        action="DELETE",
        object_type="certificate",
        object_id=certificate_id
    ):
        certificate = await get_certificate(db, certificate_id)
        await crud.delete_certificate(db, certificate)
        await db.flush()
