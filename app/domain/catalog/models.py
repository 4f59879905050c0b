from sqlalchemy.orm import mapped_column, Mapped
from sqlalchemy import Identity, Text
from app.core.database import Base


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Identity(always=True), primary_key=True)
    model_name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    range: Mapped[str] = mapped_column(Text, nullable=False)


class Engineer(Base):
    __tablename__ = "engineers"

    id: Mapped[int] = mapped_column(Identity(always=True), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
