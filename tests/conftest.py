"""
Pytest configuration and shared fixtures.
"""

from datetime import date
from pathlib import Path

import pytest

from case7.adapters.outbound.vector_store import InMemoryVectorIndex
from case7.core.domain import Case, Category, Difficulty
from case7.core.ports.embedding_port import EmbeddingPort


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (HTTP surface, mocked collaborators)")
    config.addinivalue_line("markers", "slow: Slow tests (network, large data)")


class FakeEmbedding(EmbeddingPort):
    """Deterministic bag-of-words embedding; similar words give similar vectors."""

    DIMENSION = 32

    def __init__(self):
        self.calls: list[str] = []

    def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        vector = [0.0] * self.DIMENSION
        for word in text.lower().split():
            vector[sum(map(ord, word)) % self.DIMENSION] += 1.0
        return vector


def write_case(root: Path, relative: str, frontmatter: str, body: str = "Body text.") -> Path:
    """Write a markdown case file under ``root``."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"---\n{frontmatter.strip()}\n---\n\n{body}\n", encoding="utf-8")
    return path


@pytest.fixture
def make_case():
    """Factory for Case objects with sensible defaults."""

    def _make(
        id: str,
        title: str = "Untitled",
        content: str = "",
        tags: list[str] | None = None,
        category: Category = Category.WEB,
        difficulty: Difficulty = Difficulty.BEGINNER,
        **kwargs,
    ) -> Case:
        return Case(
            id=id,
            title=title,
            category=category,
            tags=tags if tags is not None else [],
            difficulty=difficulty,
            last_updated=date(2025, 1, 1),
            content=content,
            source_path=Path(f"cases/{category.value}/{id}.md"),
            **kwargs,
        )

    return _make


@pytest.fixture
def sample_cases(make_case):
    """The Stripe / auth pair plus a mobile case."""
    return [
        make_case(
            "a",
            title="Stripe Checkout",
            tags=["stripe", "web"],
            content="Use Stripe for checkout. It is fast.",
        ),
        make_case(
            "b",
            title="Auth Setup",
            tags=["auth"],
            content="Supabase handles auth.",
            category=Category.BACKEND,
        ),
        make_case(
            "c",
            title="Expo Push Notifications",
            tags=["expo", "notifications"],
            content="Expo wraps APNs and FCM. Test on a device.",
            category=Category.MOBILE,
            difficulty=Difficulty.ADVANCED,
        ),
    ]


@pytest.fixture
def cases_dir(tmp_path):
    """A small on-disk case tree, one file per category directory."""
    root = tmp_path / "cases"
    write_case(
        root,
        "web/stripe-checkout.md",
        """
id: web-stripe
title: Stripe Checkout
category: web
tags: [stripe, payments]
difficulty: intermediate
last_updated: 2025-03-14
tested_versions:
  next: 14
  stripe: "15.4"
""",
        "# Stripe Checkout\n\nIntro text.\n\n## Install\n\nnpm install stripe\n\n"
        "## Setup\n\nAdd keys.\n\n## Usage\n\nCreate a session.\n",
    )
    write_case(
        root,
        "backend/supabase-auth.md",
        """
id: backend-auth
title: Supabase Auth
tags: [auth, supabase]
difficulty: beginner
last_updated: "2025-02-02"
""",
        "Supabase handles auth. Sign in with GitHub.",
    )
    return root


@pytest.fixture
def fake_embedding():
    return FakeEmbedding()


@pytest.fixture
def memory_index():
    return InMemoryVectorIndex()


@pytest.fixture
def case_writer():
    """The ``write_case`` helper, for tests that build their own trees."""
    return write_case
