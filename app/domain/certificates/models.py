from datetime import date, datetime, timezone
from sqlalchemy.orm import mapped_column, Mapped
from sqlalchemy import Identity, Text, Date, TIMESTAMP, text
from sqlalchemy.dialects.postgresql import JSONB
from app.core.database import Base


class Certificate(Base):
    __tablename__ = "certificates"

    id: Mapped[int] = mapped_column(Identity(always=True), primary_key=True)
    certificate_no: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    customer_name: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    site_location: Mapped[str | None] = mapped_column(Text)
    make_model: Mapped[str | None] = mapped_column(Text)
    range: Mapped[str | None] = mapped_column(Text)
    serial_no: Mapped[str | None] = mapped_column(Text)
    calibration_gas: Mapped[str | None] = mapped_column(Text)
    gas_canister_details: Mapped[str | None] = mapped_column(Text)
    date_of_calibration: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    calibration_due_date: Mapped[date | None] = mapped_column(Date)
    observations: Mapped[list[dict]] = mapped_column(JSONB, nullable=False, default=list,
                                                     server_default=text("'[]'::jsonb"))
    engineer_name: Mapped[str | None] = mapped_column(Text)
    status: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True),
                                                 default=lambda: datetime.now(timezone.utc),
                                                 server_default=text("timezone('utc', now())"),
                                                 nullable=False)
