"""Environment-driven settings for quicksql.

Read from ``QUICKSQL_*`` environment variables and an optional ``.env`` file.
Unknown variables are ignored.

Examples:
    >>> import os
    >>> os.environ["QUICKSQL_DIALECT"] = "mysql"
    >>> QuickSQLSettings().dialect
    'mysql'
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from quicksql.dialect import get_dialect


class QuickSQLSettings(BaseSettings):
    """Settings consumed by :class:`~quicksql.session.Session` and logging setup.

    Fields
    ──────
    dialect         : Dialect used when a Session gets no explicit one
    log_level       : Level passed to configure_logging
    json_logs       : Force JSON (True) / console (False) logs; None auto-detects
    log_statements  : Include synthesized SQL text in debug events
    """

    model_config = SettingsConfigDict(
        env_prefix="QUICKSQL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    dialect: str = Field(default="generic", description="Registered dialect name")
    log_level: str = "INFO"
    json_logs: bool | None = None
    log_statements: bool = False

    @field_validator("dialect")
    @classmethod
    def _known_dialect(cls, value: str) -> str:
        get_dialect(value)
        return value.lower()

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    def configure_logging(self, service: str = "quicksql") -> None:
        """Apply ``log_level`` / ``json_logs`` via :func:`quicksql.logging.configure_logging`."""
        from quicksql.logging import configure_logging

        configure_logging(level=self.log_level, json_format=self.json_logs, service=service)
