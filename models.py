"""
Data models for the URL redirect service
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, field_validator


class SourceKind(str, Enum):
    """Kind of data source, decided once from the data file location"""
    YAML = "yaml"
    JSON = "json"
    DATABASE = "db"
    UNSUPPORTED = "unsupported"


class RouteEntry(BaseModel):
    """One path -> url association read from a data source"""
    path: str = ""
    url: str = ""

    @field_validator("path", "url", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        """Missing or null fields are read as empty strings"""
        if v is None:
            return ""
        return v
