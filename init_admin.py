"""
Seed the default administrator account used for the first sign-in.
"""
import asyncio

from sqlalchemy import select

from codemart.db.models import User
from codemart.infrastructure.database.session import dispose_engine, init_db, session_scope
from codemart.modules.users import Role, UserCreateInput, UserService

DEFAULT_EMAIL = "admin@example.com"
DEFAULT_PASSWORD = "admin123"


async def create_default_admin() -> None:
    """Create the admin account unless one already exists."""
    await init_db()

    async with session_scope() as db:
        existing = await db.execute(select(User.id).where(User.role == Role.ADMIN.value).limit(1))
        if existing.first() is not None:
            print("Admin account already exists, nothing to do")
            return

        service = UserService.with_session(db)
        user = await service.register(UserCreateInput(name="Admin", email=DEFAULT_EMAIL, password=DEFAULT_PASSWORD))
        # registration only hands out buyer/seller, so promote afterwards
        await service.set_role(user.id, Role.ADMIN)

    print("=" * 50)
    print("Default admin account created!")
    print(f"Email: {DEFAULT_EMAIL}")
    print(f"Password: {DEFAULT_PASSWORD}")
    print("Change the password after signing in!")
    print("=" * 50)


async def main() -> None:
    try:
        await create_default_admin()
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
