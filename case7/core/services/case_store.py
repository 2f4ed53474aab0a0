"""In-memory store of parsed cases, keyed by id."""

import logging
from pathlib import Path

from ..domain import Case, Category
from ..ports.case_source_port import CaseSourcePort

logger = logging.getLogger(__name__)


class CaseStore:
    """Holds the loaded case corpus and answers lookups against it.

    The store is rebuilt wholesale on every load: a new mapping is built off
    to the side and then published with a single reference assignment, so
    concurrent readers see either the old corpus or the new one, never a
    half-populated mapping.
    """

    def __init__(self, source_dir: Path, source: CaseSourcePort) -> None:
        """Initialize an empty store.

        Args:
            source_dir: Root directory of the markdown case tree.
            source: Loader used to parse the tree.
        """
        self.source_dir = Path(source_dir).resolve()
        self._source = source
        self._cases: dict[str, Case] = {}

    def load_all(self) -> list[Case]:
        """Load (or reload) every case from ``source_dir``.

        Returns:
            The cases now held by the store.
        """
        logger.info("Loading cases from %s", self.source_dir)

        cases: dict[str, Case] = {}
        for case in self._source.load_all(self.source_dir):
            if case.id in cases:
                logger.warning(
                    "Duplicate case id %s in %s replaces %s",
                    case.id,
                    case.source_path,
                    cases[case.id].source_path,
                )
            cases[case.id] = case

        self._cases = cases
        logger.info("Loaded %d cases", len(cases))
        return list(cases.values())

    reload = load_all

    def get_by_id(self, case_id: str) -> Case | None:
        return self._cases.get(case_id)

    def get_all(self) -> list[Case]:
        return list(self._cases.values())

    def get_by_category(self, category: Category | str) -> list[Case]:
        category = Category(category)
        return [case for case in self.get_all() if case.category == category]

    def get_by_tag(self, tag: str) -> list[Case]:
        """Cases with any tag containing ``tag``, ignoring case."""
        needle = tag.lower()
        return [
            case for case in self.get_all() if any(needle in t.lower() for t in case.tags)
        ]

    def __len__(self) -> int:
        return len(self._cases)
