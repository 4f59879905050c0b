"""Sequential certificate numbers of the form ``RPS/CER/24-25/0001``.

The counter lives in a single ``certificate_counters`` row. Each call bumps it
with one atomic upsert, so concurrent requests never receive the same number.
The year segment is taken from the call time, not from when the row was created.
"""
import logging
from datetime import datetime
from zoneinfo import ZoneInfo
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.auditing import AuditSpan
from app.core.config import CERTIFICATE_NUMBER_PREFIX, CERTIFICATE_COUNTER_KEY, CERTIFICATE_TIMEZONE
from app.domain.certificates import crud
from app.domain.certificates.schemas import CertificateCounterDTO
from app.domain.exceptions import StorageUnavailable


logger = logging.getLogger("app.certificate_numbers")

TZ = ZoneInfo(CERTIFICATE_TIMEZONE)


def fiscal_year_range(now: datetime) -> str:
    return f"{now.year % 100:02d}-{(now.year + 1) % 100:02d}"


def format_certificate_number(number: int, now: datetime, prefix: str = CERTIFICATE_NUMBER_PREFIX) -> str:
    # padding only widens, 10000 stays 10000
    return f"{prefix}/CER/{fiscal_year_range(now)}/{number:04d}"


async def generate_certificate_number(db: AsyncSession, *, now: datetime | None = None) -> str:
    now = now or datetime.now(TZ)
    async with AuditSpan(
        scope="CERTIFICATE_NUMBERS",
        action="GENERATE",
        object_type="certificate_counter",
        object_id=CERTIFICATE_COUNTER_KEY
    ) as span:
        try:
            number = await crud.next_counter_value(db, CERTIFICATE_COUNTER_KEY)
            label = format_certificate_number(number, now)
            await crud.store_generated_label(db, label, CERTIFICATE_COUNTER_KEY)
        except DBAPIError as e:
            raise StorageUnavailable("Certificate number storage unavailable") from e

        span.meta.update({"last_number": number, "certificate_number": label})
        logger.info("Issued certificate number %s", label)
        return label


async def reset_certificate_number(db: AsyncSession) -> None:
    async with AuditSpan(
        scope="CERTIFICATE_NUMBERS",
        action="RESET",
        object_type="certificate_counter",
        object_id=CERTIFICATE_COUNTER_KEY
    ):
        try:
            await crud.reset_counter(db, CERTIFICATE_COUNTER_KEY)
        except DBAPIError as e:
            raise StorageUnavailable("Certificate number storage unavailable") from e
        logger.warning("Certificate number counter reset")


async def get_certificate_counter(db: AsyncSession) -> CertificateCounterDTO:
    try:
        row = await crud.get_counter(db, CERTIFICATE_COUNTER_KEY)
    except DBAPIError as e:
        raise StorageUnavailable("Certificate number storage unavailable") from e
    if row is None:
        return CertificateCounterDTO(last_number=0, generated_label=None)
    return CertificateCounterDTO(last_number=row.last_number, generated_label=row.generated_label)
