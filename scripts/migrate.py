#!/usr/bin/env python3
"""Apply the employees schema, demo rows and search function against EMPLOYEES_DB_URL."""
import argparse
import asyncio
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

import asyncpg
from dotenv import load_dotenv

# Load env
for p in [ROOT / "config" / "env" / ".env", ROOT / ".env"]:
    if p.exists():
        load_dotenv(p)
        break

MIGRATIONS_DIR = ROOT / "migrations" / "versions"


async def run_migrations(url: str, files: list[Path]) -> None:
    # asyncpg uses postgresql:// not postgresql+asyncpg://
    conn = await asyncpg.connect(url.replace("postgresql+asyncpg://", "postgresql://"))
    try:
        for sql_path in files:
            sql = sql_path.read_text(encoding="utf-8")
            # Function bodies hold their own statements, so the file runs as one script
            async with conn.transaction():
                await conn.execute(sql)
            print(f"Migration {sql_path.name} applied successfully.")
    finally:
        await conn.close()


def main():
    parser = argparse.ArgumentParser(description="Apply SQL migrations to the employees database.")
    parser.add_argument("--env-var", default="EMPLOYEES_DB_URL", help="Env var holding the Postgres URL")
    args = parser.parse_args()
    url = os.getenv(args.env_var)
    if not url:
        print(f"{args.env_var} not set. Set it in config/env/.env or .env")
        sys.exit(1)
    files = sorted(MIGRATIONS_DIR.glob("*.sql"))
    if not files:
        print(f"No migrations found in {MIGRATIONS_DIR}")
        sys.exit(1)
    asyncio.run(run_migrations(url, files))


if __name__ == "__main__":
    main()
