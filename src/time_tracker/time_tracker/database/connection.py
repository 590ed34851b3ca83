from __future__ import annotations

from dataclasses import dataclass

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "time_tracker"

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        defaults = cls()
        return cls(
            host=str(db_config.get("host") or defaults.host),
            port=int(db_config.get("port") or defaults.port),
            user=str(db_config.get("user") or defaults.user),
            password=str(db_config.get("password") or ""),
            database=str(db_config.get("database") or defaults.database),
        )

    @property
    def target(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Connection factory for the MySQL repositories.

    Every repository call opens its own short-lived connection (see
    `mysql_base.db_cursor`), so one factory is shared by all request threads.
    """

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @property
    def target(self) -> str:
        return self._config.target

    def connect(self, *, with_database: bool = True):
        c = self._config
        kwargs = dict(host=c.host, port=c.port, user=c.user, password=c.password, use_pure=True)
        if with_database:
            kwargs["database"] = c.database
        return mysql.connector.connect(**kwargs)
