"""Create the time tracker tables (and optionally the demo rows).

    python scripts/init_db.py [--seed]
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.time_tracker.time_tracker.database.bootstrap import apply_schema, apply_seed_sql, list_tables
from src.time_tracker.time_tracker.database.connection import DBConfig


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--seed", action="store_true", help="also load database/seed.sql")
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    db_config = dict(importlib.import_module(get_settings_module()).DB_CONFIG)
    target = DBConfig.from_dict(db_config).target

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    print(f"OK: schema applied -> {target} (tables={len(list_tables(db_config))})")

    if args.seed:
        count = apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        print(f"OK: seed applied -> {target} ({count} statements)")


if __name__ == "__main__":
    main()
