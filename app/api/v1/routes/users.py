from typing import Annotated
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.dependencies.auth import require_staff, require_admin
from app.core.pagination import PageDTO
from app.domain.users.models import User
from app.domain.users.schemas import UserReadDTO, AdminUsersQueryDTO, PasswordChangeDTO, AdminUserListItemDTO, \
    UserUpdateDTO
from app.services import users_service

router = APIRouter(tags=["users"])
db_dependency = Annotated[AsyncSession, Depends(get_db)]
me_dependency = Annotated[User, Depends(require_staff)]


@router.get(
    "/users/me",
    status_code=status.HTTP_200_OK,
    response_model=UserReadDTO,
    response_model_exclude_none=True
)
async def get_me(user: me_dependency):
    return user


@router.post(
    "/users/me/password",
    status_code=status.HTTP_204_NO_CONTENT
)
async def change_my_password(schema: PasswordChangeDTO, db: db_dependency, user: me_dependency):
    await users_service.change_password(db, user, schema)


@router.get(
    "/admin/users",
    status_code=status.HTTP_200_OK,
    response_model=PageDTO[AdminUserListItemDTO],
    dependencies=[Depends(require_admin)]
)
async def list_admin_users(db: db_dependency, query: Annotated[AdminUsersQueryDTO, Depends()]):
    return await users_service.list_users_admin(db, query)


@router.get(
    "/admin/users/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=AdminUserListItemDTO,
    dependencies=[Depends(require_admin)]
)
async def get_admin_user(user_id: int, db: db_dependency):
    return await users_service.get_user(db, user_id)


@router.patch(
    "/admin/users/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=AdminUserListItemDTO,
    dependencies=[Depends(require_admin)]
)
async def update_admin_user(user_id: int, schema: UserUpdateDTO, db: db_dependency):
    return await users_service.update_user(db, user_id, schema)


@router.delete("/admin/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_admin_user(user_id: int, db: db_dependency, actor: Annotated[User, Depends(require_admin)]):
    await users_service.delete_user(db, user_id, actor)
