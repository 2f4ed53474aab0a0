"""Domain models for case7.

- case: Category, Difficulty, Case, CaseSearchResult and VectorHit
- frontmatter: CaseFrontmatter, the pydantic schema for case files
- reports: IndexReport, ValidationReport and CaseLookup

    from case7.core.domain import Case, Category, CaseSearchResult
"""

from .case import Case, CaseSearchResult, Category, Difficulty, VectorHit
from .frontmatter import CaseFrontmatter
from .reports import CaseLookup, IndexReport, ValidationReport

__all__ = [
    # Case models
    "Case",
    "Category",
    "Difficulty",
    "CaseSearchResult",
    "VectorHit",
    "CaseFrontmatter",
    # Results
    "CaseLookup",
    "IndexReport",
    "ValidationReport",
]
