import asyncio
import sys
from pathlib import Path

# Add project root to sys.path
project_root = Path(__file__).resolve().parent.parent
sys.path.append(str(project_root))

from stayhub.config import get_settings  # noqa: E402
from stayhub.infrastructure.db.engine import build_engine  # noqa: E402
from stayhub.infrastructure.db.tables import metadata  # noqa: E402


async def reset():
    engine = build_engine(get_settings())
    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
        print("Dropped all tables.")
        await conn.run_sync(metadata.create_all)
        print("Recreated all tables.")
    await engine.dispose()

if __name__ == "__main__":
    asyncio.run(reset())
