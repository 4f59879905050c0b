from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.pagination import paginate, search_clause, sort_clause
from .models import Category, Engineer

CATEGORY_SORTABLE = {"model_name": Category.model_name, "range": Category.range}
ENGINEER_SORTABLE = {"name": Engineer.name}


async def get_category_by_id(db: AsyncSession, category_id: int) -> Category | None:
    stmt = select(Category).where(Category.id == category_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def list_categories(
        db: AsyncSession,
        page: int,
        page_size: int,
        *,
        q: str | None = None,
        sort_by: str | None = None,
        sort_dir: str = "asc"
) -> tuple[list[Category], int]:
    search = search_clause(q, Category.model_name, Category.range)
    items, total = await paginate(
        db,
        base_stmt=select(Category),
        page=page,
        page_size=page_size,
        where=[search] if search is not None else None,
        order_by=[*sort_clause(CATEGORY_SORTABLE, sort_by, sort_dir, "model_name"), Category.id],
    )
    return list(items), total


async def get_engineer_by_id(db: AsyncSession, engineer_id: int) -> Engineer | None:
    stmt = select(Engineer).where(Engineer.id == engineer_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def list_engineers(
        db: AsyncSession,
        page: int,
        page_size: int,
        *,
        q: str | None = None,
        sort_by: str | None = None,
        sort_dir: str = "asc"
) -> tuple[list[Engineer], int]:
    search = search_clause(q, Engineer.name)
    items, total = await paginate(
        db,
        base_stmt=select(Engineer),
        page=page,
        page_size=page_size,
        where=[search] if search is not None else None,
        order_by=[*sort_clause(ENGINEER_SORTABLE, sort_by, sort_dir, "name"), Engineer.id],
    )
    return list(items), total


async def add(db: AsyncSession, obj):
    db.add(obj)
    return obj


async def apply(obj, data: dict):
    for k, v in data.items():
        setattr(obj, k, v)
    return obj


async def delete(db: AsyncSession, obj) -> None:
    await db.delete(obj)
