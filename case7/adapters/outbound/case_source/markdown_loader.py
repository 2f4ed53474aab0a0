"""Loads case documents from a tree of markdown files with YAML frontmatter."""

import logging
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from ....core.domain import Case, CaseFrontmatter, Category
from ....core.domain.exceptions import CaseParseError, CaseValidationError
from ....core.ports.case_source_port import CaseSourcePort

logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)
CASES_DIR_NAME = "cases"
DEFAULT_CATEGORY = Category.TOOLS


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Split a markdown document into its frontmatter mapping and body.

    Args:
        text: Full file contents.

    Returns:
        Tuple of (frontmatter, body). Documents without a frontmatter block
        yield an empty mapping and the whole text as body.

    Raises:
        CaseParseError: If the frontmatter is not valid YAML or not a mapping.
    """
    match = FRONTMATTER_PATTERN.match(text)
    if not match:
        return {}, text

    try:
        data = yaml.safe_load(match.group(1)) or {}
    except (yaml.YAMLError, ValueError) as e:
        # PyYAML raises ValueError for impossible timestamps such as 2025-13-45
        raise CaseParseError("Invalid YAML frontmatter", cause=e) from e

    if not isinstance(data, dict):
        raise CaseParseError(
            "Frontmatter must be a mapping", context={"type": type(data).__name__}
        )
    return data, text[match.end() :]


def category_from_path(path: Path) -> Category:
    """Category named by the directory right below ``cases/``, else ``tools``."""
    parts = path.parts
    if CASES_DIR_NAME in parts:
        index = parts.index(CASES_DIR_NAME)
        if index < len(parts) - 1:
            try:
                return Category(parts[index + 1])
            except ValueError:
                pass
    return DEFAULT_CATEGORY


class MarkdownCaseLoader(CaseSourcePort):
    """Parses ``*.md`` case files found anywhere under a root directory."""

    def load_all(self, root: Path) -> list[Case]:
        """Load every valid case under ``root``.

        Files that cannot be read, parsed or validated are logged and
        skipped. A missing root yields no cases.
        """
        root = Path(root)
        if not root.is_dir():
            logger.error("Error loading cases: %s is not a directory", root)
            return []

        cases = []
        for path in sorted(root.rglob("*.md")):
            if not path.is_file():
                continue
            try:
                cases.append(self.load_case(path))
            except (CaseParseError, CaseValidationError) as e:
                logger.error("Error loading case from %s: %s", path, e)
        return cases

    def load_case(self, path: Path) -> Case:
        """Parse and validate a single case file.

        Raises:
            CaseParseError: If the file cannot be read or its YAML is invalid.
            CaseValidationError: If the frontmatter fails schema validation.
        """
        try:
            text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise CaseParseError(
                f"Could not read {path.name}", cause=e, context={"path": str(path)}
            ) from e

        data, body = split_frontmatter(text)

        if not data.get("category"):
            data["category"] = category_from_path(path).value

        try:
            frontmatter = CaseFrontmatter.model_validate(data)
        except PydanticValidationError as e:
            raise CaseValidationError(
                f"Invalid frontmatter in {path.name}",
                cause=e,
                context={
                    "path": str(path),
                    "errors": e.errors(
                        include_url=False, include_context=False, include_input=False
                    ),
                },
            ) from e

        case = Case(
            id=frontmatter.id,
            title=frontmatter.title,
            category=frontmatter.category,
            tags=frontmatter.tags,
            difficulty=frontmatter.difficulty,
            last_updated=frontmatter.last_updated,
            tested_versions=frontmatter.tested_versions,
            estimated_time=frontmatter.estimated_time,
            prerequisites=frontmatter.prerequisites,
            content=body.strip(),
            source_path=path,
        )
        logger.debug("Loaded case: %s", case.id)
        return case
