"""Case Source Port Interface."""

from abc import ABC, abstractmethod
from pathlib import Path

from ..domain import Case


class CaseSourcePort(ABC):
    """Abstract interface for reading the case corpus."""

    @abstractmethod
    def load_all(self, root: Path) -> list[Case]:
        """Load every case under ``root``.

        Implementations skip individual documents that fail to parse rather
        than aborting the whole load.
        """
        ...
