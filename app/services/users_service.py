from anyio import to_thread
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.pagination import PageDTO
from app.domain.users.schemas import AdminUsersQueryDTO, PasswordChangeDTO, AdminUserListItemDTO, UserUpdateDTO
from app.domain.users import crud as crud
from app.domain.users.models import User
from app.domain.auth.crud import revoke_all_for_user
from app.core.auditing import AuditSpan
from app.core.security import verify_password, hash_password
from app.domain.exceptions import Unauthorized, InvalidInput, NotFound, Conflict, Forbidden


async def get_user(db: AsyncSession, user_id: int) -> User:
    user = await crud.get_user_by_id(user_id, db)
    if not user:
        raise NotFound("User not found", ctx={"user_id": user_id})
    return user


async def list_users_admin(db: AsyncSession, query: AdminUsersQueryDTO) -> PageDTO[AdminUserListItemDTO]:
    users, total = await crud.list_all_users(
        db,
        page=query.page,
        page_size=query.page_size,
        email=query.email,
        name=query.name,
        is_active=query.is_active,
    )

    items = [AdminUserListItemDTO.model_validate(u, from_attributes=True) for u in users]

    return PageDTO[AdminUserListItemDTO](items=items, total=total, page=query.page, page_size=query.page_size)


async def update_user(db: AsyncSession, user_id: int, schema: UserUpdateDTO) -> User:
    data = schema.model_dump(exclude_none=True, exclude={"password"})
    async with AuditSpan(
            scope="USERS",
            action="UPDATE",
            object_type="user",
            object_id=user_id,
            meta={"fields": sorted(schema.model_dump(exclude_none=True).keys())}
    ):
        user = await get_user(db, user_id)

        if "email" in data:
            data["email"] = data["email"].strip().lower()
        for k, v in data.items():
            setattr(user, k, v)

        if schema.password is not None:
            user.password_hash = await to_thread.run_sync(hash_password, schema.password.get_secret_value())
            await revoke_all_for_user(db, user_id=user.id)

        if schema.is_active is False:
            await revoke_all_for_user(db, user_id=user.id)

        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("User with this email already exists", ctx={"user_id": user_id}) from e
        return user


async def delete_user(db: AsyncSession, user_id: int, actor: User) -> None:
    async with AuditSpan(scope="USERS", action="DELETE", object_type="user", object_id=user_id):
        if actor.id == user_id:
            raise Forbidden("Cannot delete own account", ctx={"user_id": user_id})
        user = await get_user(db, user_id)
        await crud.delete_user(db, user)


async def change_password(db: AsyncSession, user: User, schema: PasswordChangeDTO) -> None:
    async with AuditSpan(scope="USERS", action="CHANGE_PASSWORD", object_type="user", object_id=user.id):
        if not await to_thread.run_sync(verify_password, schema.old_password.get_secret_value(), user.password_hash):
            raise Unauthorized("Old password is incorrect", ctx={"user_id": user.id})
        if await to_thread.run_sync(verify_password, schema.new_password.get_secret_value(), user.password_hash):
            raise InvalidInput("New password must be different from the current one", ctx={"user_id": user.id})
        user.password_hash = await to_thread.run_sync(hash_password, schema.new_password.get_secret_value())
        await db.flush()
