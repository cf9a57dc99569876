"""Initialize database tables"""
import asyncio
from backend.database import create_tables, engine


async def init():
    await create_tables()
    await engine.dispose()
    print("Database tables created successfully.")


if __name__ == "__main__":
    asyncio.run(init())
