from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from typing import Annotated
from jose import JWTError
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.security import decode_access_token
from app.domain.users.models import User
from app.domain.auth.schemas import TokenPayload
from app.domain.exceptions import Unauthorized, Forbidden
from app.core.ctx import bind_actor


oauth2_bearer = OAuth2PasswordBearer(tokenUrl="/auth/login")


async def get_token_payload(token: Annotated[str, Depends(oauth2_bearer)]) -> TokenPayload:
    try:
        raw_payload = decode_access_token(token)
    except JWTError:
        raise Unauthorized("Invalid authentication credentials", ctx={"reason": "invalid_token"})

    if raw_payload.get("typ") != "access":
        raise Unauthorized("Invalid token type", ctx={"reason": "invalid_type"})
    try:
        return TokenPayload.model_validate(raw_payload)
    except ValidationError:
        raise Unauthorized("Invalid authentication credentials", ctx={"reason": "invalid_payload"})


def get_current_user_with_roles(*allowed_roles: str):
    allowed = set(allowed_roles)

    async def _inner(payload: Annotated[TokenPayload, Depends(get_token_payload)],
                     db: Annotated[AsyncSession, Depends(get_db)]) -> User:
        stmt = select(User).where(User.id == int(payload.sub), User.is_active.is_(True))
        result = await db.execute(stmt)
        user = result.scalars().first()
        if not user:
            raise Unauthorized("User not found", ctx={"user_id": payload.sub})

        roles = {r.name for r in user.roles}
        bind_actor(user.id, roles)

        if allowed and roles.isdisjoint(allowed):
            raise Forbidden("Permission denied", ctx={"required": sorted(allowed), "user_roles": sorted(roles)})
        return user
    return _inner


require_staff = get_current_user_with_roles("ADMIN", "USER")
require_admin = get_current_user_with_roles("ADMIN")
