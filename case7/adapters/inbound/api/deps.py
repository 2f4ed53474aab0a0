"""FastAPI dependency providers.

Routes depend on these functions rather than on the container directly so
tests can swap them through ``app.dependency_overrides``.
"""

from ....application.services.case_tools import CaseToolsService
from ....composition import container
from ....core.ports.vector_index_port import VectorIndexPort
from ....core.services.case_store import CaseStore


def get_case_store() -> CaseStore:
    return container.get_case_store()


def get_vector_index() -> VectorIndexPort:
    return container.get_vector_index()


def get_case_tools() -> CaseToolsService:
    return container.get_case_tools()
