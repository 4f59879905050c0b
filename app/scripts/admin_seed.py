import asyncio
import logging
from anyio import to_thread
from app.core.logging_setup import configure_logging
from app.core.security import hash_password
from app.domain.users.crud import get_role_by_name, get_user_by_email
from app.domain.users.models import User
from app.core.config import ADMIN_EMAIL, ADMIN_PASSWORD, ADMIN_NAME, ADMIN_CONTACT
from app.core.database import AsyncSessionLocal


logger = logging.getLogger("app.seed")


async def seed_admin_user(db) -> User | None:
    if not ADMIN_PASSWORD or not ADMIN_EMAIL:
        logger.warning("Missing admin password or email - skipping seed")
        return None

    admin_role = await get_role_by_name("ADMIN", db)
    user_role = await get_role_by_name("USER", db)

    user = await get_user_by_email(ADMIN_EMAIL, db)

    if not user:
        user = User(
            name=ADMIN_NAME,
            email=ADMIN_EMAIL.lower(),
            contact=ADMIN_CONTACT,
            password_hash=await to_thread.run_sync(hash_password, ADMIN_PASSWORD),
            roles=[]
        )
        db.add(user)
        have = set()
    else:
        have = {r.name for r in user.roles}

    need = [r for r in (admin_role, user_role) if r and r.name not in have]
    if need:
        user.roles.extend(need)

    await db.flush()
    return user


async def main():
    configure_logging()
    async with AsyncSessionLocal() as db:
        user = await seed_admin_user(db)
        await db.commit()
        if user:
            logger.info("Admin OK: %s", user.email)


if __name__ == "__main__":
    asyncio.run(main())
