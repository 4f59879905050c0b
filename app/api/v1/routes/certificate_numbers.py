from fastapi import APIRouter, Depends, status, Query
from typing import Annotated
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.dependencies.auth import require_staff, require_admin
from app.domain.certificates.schemas import CertificateNumberDTO, CertificateCounterDTO, MessageDTO
from app.domain.exceptions import Forbidden
from app.domain.users.models import User
from app.services import certificate_number_service


router = APIRouter(prefix="/certificate-number", tags=["certificate-number"])
db_dependency = Annotated[AsyncSession, Depends(get_db)]


@router.post(
    "",
    status_code=status.HTTP_200_OK,
    response_model=CertificateNumberDTO | MessageDTO
)
async def issue_certificate_number(
        db: db_dependency,
        user: Annotated[User, Depends(require_staff)],
        reset: bool = Query(False, description="Reset the counter instead of issuing a number")
):
    if reset:
        if not any(r.name == "ADMIN" for r in user.roles):
            raise Forbidden("Only administrators can reset the certificate number", ctx={"reset": True})
        await certificate_number_service.reset_certificate_number(db)
        return MessageDTO(message="Certificate number reset successfully.")

    number = await certificate_number_service.generate_certificate_number(db)
    return CertificateNumberDTO(certificate_number=number)


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=CertificateCounterDTO,
    dependencies=[Depends(require_admin)]
)
async def get_certificate_counter(db: db_dependency):
    return await certificate_number_service.get_certificate_counter(db)
