"""Dump the time tracker database with `mysqldump` (MySQL client tools)."""

from __future__ import annotations

import argparse
import importlib
import os
import subprocess
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.time_tracker.time_tracker.database.connection import DBConfig


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--out-dir", type=Path, default=REPO_ROOT / "backups")
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    db = DBConfig.from_dict(importlib.import_module(get_settings_module()).DB_CONFIG)

    args.out_dir.mkdir(parents=True, exist_ok=True)
    out_file = args.out_dir / f"{db.database}_{datetime.now():%Y%m%d_%H%M%S}.sql"

    cmd = ["mysqldump", f"-h{db.host}", f"-P{db.port}", f"-u{db.user}", "--single-transaction", db.database]
    # Password goes through the environment so it never shows up in `ps`.
    env = {**os.environ, "MYSQL_PWD": db.password}

    try:
        with out_file.open("wb") as f:
            subprocess.run(cmd, stdout=f, stderr=subprocess.PIPE, check=True, env=env)
    except FileNotFoundError:
        raise SystemExit("`mysqldump` not found. Install the MySQL client tools first.")
    except subprocess.CalledProcessError as e:
        out_file.unlink(missing_ok=True)
        raise SystemExit(f"mysqldump failed: {e.stderr.decode(errors='replace').strip()}")

    print(f"OK: backup written to {out_file}")


if __name__ == "__main__":
    main()
