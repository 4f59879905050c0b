from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy import select, func
from app.core.pagination import paginate
from .models import Role, User


async def get_role_by_name(name: str, db: AsyncSession) -> Role | None:
    stmt = select(Role).where(Role.name == name)
    result = await db.execute(stmt)
    return result.scalars().first()


async def get_user_by_email(email: str, db: AsyncSession) -> User | None:
    stmt = select(User).options(selectinload(User.roles)).where(User.email == email)
    result = await db.execute(stmt)
    return result.scalars().first()


async def get_user_by_id(user_id: int, db: AsyncSession) -> User | None:
    stmt = select(User).options(selectinload(User.roles)).where(User.id == user_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def count_users(db: AsyncSession) -> int:
    total = await db.scalar(select(func.count()).select_from(User))
    return int(total or 0)


async def list_all_users(
    db: AsyncSession,
    page: int,
    page_size: int,
    *,
    email: str | None = None,
    name: str | None = None,
    is_active: bool | None = None,
) -> tuple[list[User], int]:
    stmt = select(User).options(selectinload(User.roles))
    where = []

    if email:
        where.append(func.lower(User.email) == func.lower(email))
    if name:
        where.append(User.name.ilike(f"%{name}%"))
    if is_active is not None:
        where.append(User.is_active.is_(is_active))

    items, total = await paginate(
        db,
        base_stmt=stmt,
        page=page,
        page_size=page_size,
        where=where,
        order_by=[User.created_at.desc(), User.id],
        scalars=True,
        count_by=User.id,
    )
    return list(items), total


async def delete_user(db: AsyncSession, user: User) -> None:
    await db.delete(user)
    await db.flush()
