"""Embeds cases and writes them to the vector index."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor

from ..domain import Case, IndexReport
from ..domain.utils import strip_code_blocks
from ..ports.embedding_port import EmbeddingPort
from ..ports.vector_index_port import VectorIndexPort

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 10
DEFAULT_BATCH_PAUSE = 1.0


def build_search_text(case: Case) -> str:
    """Text embedded for a case: metadata plus body without code blocks."""
    parts = [
        case.title,
        case.category.value,
        *case.tags,
        case.difficulty.value,
        strip_code_blocks(case.content),
        *(case.prerequisites or []),
    ]
    return " ".join(parts).lower()


class IndexingService:
    """Re-embeds the case corpus into a vector index.

    Cases are processed in fixed-size batches. The cases of one batch are
    embedded concurrently; batches run one after another with a pause in
    between to stay inside the embedding API's rate limits.
    """

    def __init__(
        self,
        embeddings: EmbeddingPort,
        index: VectorIndexPort,
        batch_size: int = DEFAULT_BATCH_SIZE,
        batch_pause: float = DEFAULT_BATCH_PAUSE,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be positive")
        self.embeddings = embeddings
        self.index = index
        self.batch_size = batch_size
        self.batch_pause = batch_pause

    def index_case(self, case: Case) -> None:
        """Embed and upsert one case. Embedding and index errors propagate."""
        vector = self.embeddings.embed(build_search_text(case))
        self.index.upsert(
            case.id,
            vector,
            {
                "title": case.title,
                "category": case.category.value,
                "tags": list(case.tags),
                "difficulty": case.difficulty.value,
            },
        )
        logger.debug("Indexed case: %s", case.id)

    def index_cases(self, cases: list[Case]) -> IndexReport:
        """Index ``cases`` in batches.

        A case that fails to embed or upsert is logged and recorded in the
        report; the rest of its batch and later batches still run.

        Args:
            cases: Cases to index.

        Returns:
            IndexReport with indexed and failed counts.
        """
        report = IndexReport(total=len(cases))
        logger.info("Indexing %d cases...", len(cases))

        with ThreadPoolExecutor(max_workers=self.batch_size) as executor:
            for start in range(0, len(cases), self.batch_size):
                batch = cases[start : start + self.batch_size]
                futures = [(case.id, executor.submit(self.index_case, case)) for case in batch]

                for case_id, future in futures:
                    try:
                        future.result()
                        report.indexed += 1
                    except Exception as e:
                        logger.error("Error indexing case %s: %s", case_id, e)
                        report.failed.append(case_id)

                done = min(start + self.batch_size, len(cases))
                logger.info("Indexed %d/%d cases", done, len(cases))

                if done < len(cases) and self.batch_pause > 0:
                    time.sleep(self.batch_pause)

        logger.info(
            "Case indexing completed: %d indexed, %d failed", report.indexed, len(report.failed)
        )
        return report

    def delete_case(self, case_id: str) -> None:
        self.index.delete(case_id)
        logger.debug("Deleted case from index: %s", case_id)

    def clear_index(self) -> None:
        self.index.reset()
        logger.info("Vector index cleared")
