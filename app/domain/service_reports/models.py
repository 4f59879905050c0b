from datetime import date as date_type, datetime, timezone
from sqlalchemy.orm import mapped_column, Mapped
from sqlalchemy import Identity, Text, Date, TIMESTAMP, text
from app.core.database import Base


class ServiceReport(Base):
    __tablename__ = "service_reports"

    id: Mapped[int] = mapped_column(Identity(always=True), primary_key=True)
    name_and_location: Mapped[str] = mapped_column(Text, nullable=False)
    contact_person: Mapped[str | None] = mapped_column(Text)
    contact_number: Mapped[str | None] = mapped_column(Text)
    service_engineer: Mapped[str | None] = mapped_column(Text)
    date: Mapped[date_type] = mapped_column(Date, nullable=False, index=True)
    place: Mapped[str | None] = mapped_column(Text)
    place_options: Mapped[str | None] = mapped_column(Text)
    nature_of_job: Mapped[str | None] = mapped_column(Text)
    report_no: Mapped[str | None] = mapped_column(Text, unique=True)
    make_model_quantity: Mapped[str | None] = mapped_column(Text)
    serials_calibrated_ok: Mapped[str | None] = mapped_column(Text)
    serials_faulty: Mapped[str | None] = mapped_column(Text)
    engineer_name: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True),
                                                 default=lambda: datetime.now(timezone.utc),
                                                 server_default=text("timezone('utc', now())"),
                                                 nullable=False)
