from sqlalchemy import Table, Column, Integer, Text, CheckConstraint, text
from app.core.database import Base

certificate_counters = Table(
    "certificate_counters",
    Base.metadata,
    Column("id", Text, primary_key=True),
    Column("last_number", Integer, nullable=False, server_default=text("0")),
    Column("generated_label", Text, nullable=True),
    CheckConstraint("last_number >= 0", name="chk_certificate_counter_ge0"),
)
