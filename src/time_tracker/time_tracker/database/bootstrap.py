"""Apply `database/schema.sql` and `database/seed.sql` to the configured server."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

# Quoted strings, `--` / `#` line comments, statement separators, everything else.
_SQL_TOKEN = re.compile(
    r"""
      '(?:[^'\\]|\\.|'')*'
    | "(?:[^"\\]|\\.)*"
    | `[^`]*`
    | (?:--\s|\#)[^\n]*
    | ;
    | [^'"`;\-\#]+
    | .
    """,
    re.VERBOSE | re.DOTALL,
)

# schema.sql may pin a database name for manual use; the configured one wins.
_DB_SWITCH = re.compile(r"^\s*(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def split_sql(sql: str) -> Iterator[str]:
    """Yield the statements of a SQL script, without comments or trailing `;`."""
    buf: list[str] = []
    for m in _SQL_TOKEN.finditer(sql):
        tok = m.group(0)
        if tok.startswith(("--", "#")):
            continue
        if tok == ";":
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(tok)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _factory(db_config: dict) -> DatabaseConnection:
    return DatabaseConnection(DBConfig.from_dict(db_config))


def _run_script(factory: DatabaseConnection, path: Path) -> int:
    statements = [s for s in split_sql(path.read_text(encoding="utf-8")) if not _DB_SWITCH.match(s)]

    conn = factory.connect()
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
        cur.close()
    finally:
        conn.close()

    logger.info("Applied %s to %s (%d statements)", path.name, factory.target, len(statements))
    return len(statements)


def ensure_database_exists(db_config: dict) -> None:
    factory = _factory(db_config)
    conn = factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        cur.close()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> int:
    ensure_database_exists(db_config)
    return _run_script(_factory(db_config), Path(schema_path))


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> int:
    return _run_script(_factory(db_config), Path(seed_path))


def list_tables(db_config: dict) -> list[str]:
    conn = _factory(db_config).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
