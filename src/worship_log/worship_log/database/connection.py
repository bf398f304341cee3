from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "worship_log"
    charset: str = "utf8mb4"

    @classmethod
    def from_dict(cls, settings: dict) -> "DBConfig":
        defaults = cls()
        return cls(
            host=str(settings.get("host") or defaults.host),
            port=int(settings.get("port") or defaults.port),
            user=str(settings.get("user") or defaults.user),
            password=str(settings.get("password") or ""),
            database=str(settings.get("database") or defaults.database),
        )


class DatabaseConnection:
    """Hands out short-lived MySQL connections for one configured database.

    Repositories open one connection per call; names in Korean need the
    utf8mb4 charset on every connection.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        # A different config (another APP_ENV in the same process) replaces the shared instance.
        if cls._instance is None or cls._instance.config != config:
            cls._instance = cls(config)
        return cls._instance

    def connect(self, *, with_database: bool = True):
        params = {
            "host": self._config.host,
            "port": self._config.port,
            "user": self._config.user,
            "password": self._config.password,
            "charset": self._config.charset,
        }
        if with_database:
            params["database"] = self._config.database
        return mysql.connector.connect(**params)
