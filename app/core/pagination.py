from typing import Generic, TypeVar, Literal
from pydantic import BaseModel, ConfigDict, Field, computed_field
from sqlalchemy import select, func, or_
from typing import Any
from sqlalchemy.ext.asyncio import AsyncSession
from app.domain.exceptions import InvalidInput


T = TypeVar("T")

SortDirection = Literal["asc", "desc"]


class PageDTO(BaseModel, Generic[T]):
    items: list[T]
    total: int
    page: int
    page_size: int

    @computed_field
    @property
    def pages(self) -> int:
        if self.page_size <= 0:
            return 1
        return max(1, (self.total + self.page_size - 1) // self.page_size)

    @computed_field
    @property
    def has_next(self) -> bool:
        return self.page < self.pages


class ListQueryDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=200)
    q: str | None = Field(default=None, max_length=200)
    sort_by: str | None = None
    sort_dir: SortDirection = "desc"


def search_clause(q: str | None, *columns) -> Any | None:
    if not q or not q.strip():
        return None
    like = f"%{q.strip()}%"
    return or_(*(c.ilike(like) for c in columns))


def sort_clause(sortable: dict[str, Any], sort_by: str | None, sort_dir: SortDirection, default: str) -> list[Any]:
    key = sort_by or default
    column = sortable.get(key)
    if column is None:
        raise InvalidInput("Unsupported sort column", ctx={"sort_by": key, "allowed": sorted(sortable)})
    return [column.asc() if sort_dir == "asc" else column.desc()]


async def paginate(
        db: AsyncSession,
        base_stmt,
        *,
        page: int = 1,
        page_size: int = 20,
        where: list[Any] | None = None,
        order_by: list[Any] | None = None,
        scalars: bool = True,
        count_by: Any | None = None
):
    page = max(1, int(page))
    page_size = max(1, min(200, int(page_size)))

    stmt = base_stmt
    if where:
        stmt = stmt.where(*where)
    if order_by:
        stmt = stmt.order_by(*order_by)

    if count_by is not None:
        count_stmt = stmt.with_only_columns(count_by).order_by(None).distinct()
        total = await db.scalar(select(func.count()).select_from(count_stmt.subquery()))
    else:
        total_subquery = stmt.order_by(None).limit(None).offset(None)
        total = await db.scalar(select(func.count()).select_from(total_subquery.subquery()))

    stmt = stmt.limit(page_size).offset((page - 1) * page_size)

    if scalars:
        result = await db.scalars(stmt)
    else:
        result = await db.execute(stmt)

    items = result.all()
    return items, int(total or 0)
