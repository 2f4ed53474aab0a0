"""Case document models for the search service."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any


class Category(str, Enum):
    """Product area a case belongs to."""

    MOBILE = "mobile"
    WEB = "web"
    BACKEND = "backend"
    TOOLS = "tools"
    INTEGRATIONS = "integrations"


class Difficulty(str, Enum):
    """How much prior experience a case assumes."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@dataclass
class Case:
    """A parsed markdown case document.

    Attributes:
        id: Unique, stable key across the corpus.
        title: Human readable title.
        category: Product area of the case.
        tags: Free-form tags from the frontmatter.
        difficulty: Expected experience level.
        last_updated: Date the case was last revised.
        tested_versions: Optional mapping of tool/library name to version.
        estimated_time: Optional free-form duration ("30 minutes").
        prerequisites: Optional ordered list of prerequisites.
        content: Markdown body following the frontmatter.
        source_path: File the case was loaded from.
    """

    id: str
    title: str
    category: Category
    tags: list[str]
    difficulty: Difficulty
    last_updated: date
    content: str
    source_path: Path
    tested_versions: dict[str, str] | None = None
    estimated_time: str | None = None
    prerequisites: list[str] | None = None

    def to_frontmatter(self) -> dict[str, Any]:
        """Return the frontmatter fields in their on-disk key names."""
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category.value,
            "tags": list(self.tags),
            "difficulty": self.difficulty.value,
            "last_updated": self.last_updated.isoformat(),
            "tested_versions": self.tested_versions,
            "estimated_time": self.estimated_time,
            "prerequisites": self.prerequisites,
        }


@dataclass
class CaseSearchResult:
    """A ranked search hit, built fresh for every query.

    Attributes:
        id: Case id.
        title: Case title.
        category: Case category.
        tags: Case tags.
        relevance_score: Raw vector similarity or additive keyword score.
        excerpt: Most query-relevant sentence of the case body.
    """

    id: str
    title: str
    category: Category
    tags: list[str]
    relevance_score: float
    excerpt: str


@dataclass
class VectorHit:
    """A nearest-neighbour match returned by a vector index."""

    id: str
    score: float
    metadata: dict[str, Any] = field(default_factory=dict)
