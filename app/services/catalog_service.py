from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.auditing import AuditSpan
from app.core.pagination import PageDTO
from app.domain.catalog import crud
from app.domain.catalog.models import Category, Engineer
from app.domain.catalog.schemas import CategoryCreateDTO, CategoryPutDTO, CategoriesQueryDTO, CategoryReadDTO, \
    EngineerCreateDTO, EngineerPutDTO, EngineersQueryDTO, EngineerReadDTO
from app.domain.exceptions import NotFound, Conflict


async def _flush_or_409(db: AsyncSession, msg: str, ctx: dict) -> None:
    try:
        await db.flush()
    except IntegrityError as e:
        raise Conflict(msg, ctx=ctx) from e


async def get_category(db: AsyncSession, category_id: int) -> Category:
    category = await crud.get_category_by_id(db, category_id)
    if not category:
        raise NotFound("Category not found", ctx={"category_id": category_id})
    return category


async def list_categories(db: AsyncSession, query: CategoriesQueryDTO) -> PageDTO[CategoryReadDTO]:
    categories, total = await crud.list_categories(
        db, query.page, query.page_size, q=query.q, sort_by=query.sort_by, sort_dir=query.sort_dir
    )
    items = [CategoryReadDTO.model_validate(c) for c in categories]
    return PageDTO[CategoryReadDTO](items=items, total=total, page=query.page, page_size=query.page_size)


async def create_category(db: AsyncSession, schema: CategoryCreateDTO) -> Category:
    async with AuditSpan(scope="CATALOG", action="CREATE", object_type="category") as span:
        category = await crud.add(db, Category(**schema.model_dump()))
        await _flush_or_409(db, "Model already exists", {"model_name": schema.model_name})
        span.object_id = category.id
        return category


async def update_category(db: AsyncSession, category_id: int, schema: CategoryPutDTO) -> Category:
    async with AuditSpan(scope="CATALOG", action="UPDATE", object_type="category", object_id=category_id):
        category = await crud.apply(await get_category(db, category_id), schema.model_dump())
        await _flush_or_409(db, "Model already exists", {"model_name": schema.model_name})
        return category


async def delete_category(db: AsyncSession, category_id: int) -> None:
    async with AuditSpan(scope="CATALOG", action="DELETE", object_type="category", object_id=category_id):
        await crud.delete(db, await get_category(db, category_id))
        await db.flush()


async def get_engineer(db: AsyncSession, engineer_id: int) -> Engineer:
    engineer = await crud.get_engineer_by_id(db, engineer_id)
    if not engineer:
        raise NotFound("Engineer not found", ctx={"engineer_id": engineer_id})
    return engineer


async def list_engineers(db: AsyncSession, query: EngineersQueryDTO) -> PageDTO[EngineerReadDTO]:
    engineers, total = await crud.list_engineers(
        db, query.page, query.page_size, q=query.q, sort_by=query.sort_by, sort_dir=query.sort_dir
    )
    items = [EngineerReadDTO.model_validate(e) for e in engineers]
    return PageDTO[EngineerReadDTO](items=items, total=total, page=query.page, page_size=query.page_size)


async def create_engineer(db: AsyncSession, schema: EngineerCreateDTO) -> Engineer:
    async with AuditSpan(scope="CATALOG", action="CREATE", object_type="engineer") as span:
        engineer = await crud.add(db, Engineer(**schema.model_dump()))
        await _flush_or_409(db, "Engineer already exists", {"name": schema.name})
        span.object_id = engineer.id
        return engineer


async def update_engineer(db: AsyncSession, engineer_id: int, schema: EngineerPutDTO) -> Engineer:
    async with AuditSpan(scope="CATALOG", action="UPDATE", object_type="engineer", object_id=engineer_id):
        engineer = await crud.apply(await get_engineer(db, engineer_id), schema.model_dump())
        await _flush_or_409(db, "Engineer already exists", {"name": schema.name})
        return engineer


async def delete_engineer(db: AsyncSession, engineer_id: int) -> None:
    async with AuditSpan(scope="CATALOG", action="DELETE", object_type="engineer", object_id=engineer_id):
        await crud.delete(db, await get_engineer(db, engineer_id))
        await db.flush()
