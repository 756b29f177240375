import asyncio
import sys
from pathlib import Path

# Add project root to sys.path
project_root = Path(__file__).resolve().parent.parent
sys.path.append(str(project_root))

from sqlalchemy import insert  # noqa: E402

from stayhub.config import get_settings  # noqa: E402
from stayhub.infrastructure.db.engine import build_engine  # noqa: E402
from stayhub.infrastructure.db.tables import accommodations, metadata, users  # noqa: E402
from stayhub.infrastructure.in_memory.demo_data import (  # noqa: E402
    DEMO_ACCOMMODATIONS,
    DEMO_USERS,
)


async def seed():
    engine = build_engine(get_settings())
    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
        await conn.run_sync(metadata.create_all)
        print("Recreated all tables.")

        await conn.execute(
            insert(users),
            [
                {"id": u.id, "email": u.email, "name": u.name, "role": u.role.value}
                for u in DEMO_USERS
            ],
        )
        await conn.execute(
            insert(accommodations),
            [
                {
                    "id": a.id,
                    "host_id": a.host_id,
                    "title": a.title,
                    "price_per_night": a.price_per_night,
                    "capacity": a.capacity,
                    "deleted": a.deleted,
                }
                for a in DEMO_ACCOMMODATIONS
            ],
        )
        print(f"Seeded {len(DEMO_USERS)} users and {len(DEMO_ACCOMMODATIONS)} accommodations.")
    await engine.dispose()

if __name__ == "__main__":
    asyncio.run(seed())
