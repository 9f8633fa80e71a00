"""Database seeder: creates a demo user, a bearer token and a few todos."""
import argparse
import asyncio
import secrets
from datetime import datetime, timedelta, timezone

from sqlalchemy import select

from app.config import settings
from app.database import Base, async_session, engine
from app.models import AuthToken, User
from app.repositories.todo_repository import SqlAlchemyTodoRepository
from app.services.todo_service import TodoService

SAMPLE_TODOS = [
    ("Belajar FastAPI", "Read the dependency injection chapter"),
    ("Belajar SQLAlchemy", "Async sessions and the 2.0 query style"),
    ("Buy groceries", "Milk, eggs, bread"),
    ("Write tests", "Cover the owner-scoped lookups"),
]


async def seed(email: str, name: str, num_todos: int, reset: bool) -> None:
    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        user = (await session.execute(select(User).where(User.email == email))).scalar_one_or_none()
        if user is None:
            user = User(name=name, email=email)
            session.add(user)
            await session.flush()
            print(f"  Created user {email} ({user.id})")
        else:
            print(f"  Reusing user {email} ({user.id})")

        token = secrets.token_urlsafe(32)
        session.add(
            AuthToken(
                token=token,
                user_id=user.id,
                expires_at=datetime.now(timezone.utc) + timedelta(hours=settings.AUTH_TOKEN_TTL_HOURS),
            )
        )

        service = TodoService(SqlAlchemyTodoRepository(session))
        for i in range(num_todos):
            title, description = SAMPLE_TODOS[i % len(SAMPLE_TODOS)]
            await service.create_todo(user.id, title, description)

        await session.commit()

    await engine.dispose()
    print(f"  Created {num_todos} todos")
    print(f"\nBearer token (valid {settings.AUTH_TOKEN_TTL_HOURS}h):\n  {token}")


def main():
    parser = argparse.ArgumentParser(description="Seed the todo database")
    parser.add_argument("--email", default="demo@example.com", help="Email of the demo user")
    parser.add_argument("--name", default="Demo User", help="Display name of the demo user")
    parser.add_argument("--todos", type=int, default=len(SAMPLE_TODOS), help="Number of todos to create")
    parser.add_argument("--reset", action="store_true", help="Drop all tables before seeding")
    args = parser.parse_args()
    asyncio.run(seed(args.email, args.name, args.todos, args.reset))


if __name__ == "__main__":
    main()
