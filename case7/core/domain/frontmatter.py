"""Schema for the YAML frontmatter block at the top of every case file."""

import re
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .case import Category, Difficulty

LAST_UPDATED_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class CaseFrontmatter(BaseModel):
    """Validated frontmatter fields.

    Unknown keys are ignored so authors can carry extra metadata.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    category: Category
    tags: list[str] = Field(..., min_length=1)
    difficulty: Difficulty
    last_updated: date
    tested_versions: dict[str, str] | None = None
    estimated_time: str | None = None
    prerequisites: list[str] | None = None

    @field_validator("last_updated", mode="before")
    @classmethod
    def parse_last_updated(cls, value: Any) -> Any:
        """Accept ``YYYY-MM-DD`` strings and the dates YAML produces for them."""
        if isinstance(value, date):
            return value
        if not isinstance(value, str) or not LAST_UPDATED_PATTERN.match(value):
            raise ValueError("last_updated must be a YYYY-MM-DD date")
        return value

    @field_validator("tested_versions", mode="before")
    @classmethod
    def stringify_versions(cls, value: Any) -> Any:
        # YAML reads "node: 18" as an int
        if isinstance(value, dict):
            return {
                str(name): str(version) if isinstance(version, int | float) else version
                for name, version in value.items()
            }
        return value
