"""Shared fixtures for linker tests."""

import asyncio
import json
import os
import tempfile
from typing import Dict, Iterator, List, Optional

import pytest

from kg_linker.types import EntityMention, Offset, SearchHit, Triple


def mention(text: str, start: int = 0, index: int = 0) -> EntityMention:
    """Build a mention at ``start`` spanning ``text``."""
    return EntityMention(text=text, offset=Offset(index=index, start=start, length=len(text)))


# ---------------------------------------------------------------------------
# Sample data fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_triples() -> List[Triple]:
    """Literal triples describing a few people and places."""
    return [
        Triple("http://example.org/person1", "http://schema.org/name", "Alice Smith"),
        Triple("http://example.org/person1", "http://schema.org/description", "Alice is a software engineer"),
        Triple("http://example.org/person2", "http://schema.org/name", "Bob Jones"),
        Triple("http://example.org/place1", "http://schema.org/name", "Central Park"),
        Triple("http://example.org/city1", "http://schema.org/name", "New York"),
    ]


@pytest.fixture
def sample_fragment() -> str:
    """Generated Turtle with placeholders, one used twice."""
    return (
        "@prefix schema: <https://schema.org/> .\n"
        "\n"
        "<PLACEHOLDER_ENTITY_1> a schema:Person ;\n"
        '    schema:name "Alice Smith" ;\n'
        "    schema:knows <PLACEHOLDER_ENTITY_2> .\n"
        "\n"
        "<PLACEHOLDER_ENTITY_2> a schema:Person ;\n"
        '    schema:name "Carol" .\n'
    )


# ---------------------------------------------------------------------------
# Mock classes
# ---------------------------------------------------------------------------


class MockSearchIndex:
    """Search index returning canned hits and recording every query."""

    def __init__(
        self,
        hits: Optional[Dict[str, List[SearchHit]]] = None,
        delays: Optional[Dict[str, float]] = None,
        error: Optional[Exception] = None,
    ):
        self._hits = hits or {}
        self._delays = delays or {}
        self._error = error
        self.queries: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def search(self, query: str) -> List[SearchHit]:
        self.queries.append(query)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self._delays.get(query, 0))
            if self._error is not None:
                raise self._error
            return list(self._hits.get(query, []))
        finally:
            self.in_flight -= 1

    def set_hits(self, query: str, hits: List[SearchHit]) -> None:
        self._hits[query] = hits


class CountingMinter:
    """Deterministic minter producing sequential IRIs."""

    def __init__(self, prefix: str = "https://example.org/.well-known/genid/"):
        self.prefix = prefix
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        return f"{self.prefix}{self.calls}"


class ScriptedPrompt:
    """Async prompt answering from a fixed script."""

    def __init__(self, answers: List[str]):
        self._answers = list(answers)
        self.messages: List[str] = []

    async def __call__(self, message: str) -> str:
        self.messages.append(message)
        return self._answers.pop(0)


# ---------------------------------------------------------------------------
# Mock fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def minter() -> CountingMinter:
    return CountingMinter()


@pytest.fixture
def mock_index() -> MockSearchIndex:
    return MockSearchIndex()


# ---------------------------------------------------------------------------
# Temporary file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def temp_triples_file(sample_triples: List[Triple]) -> Iterator[str]:
    """JSONL file of sample triples."""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".jsonl", delete=False) as f:
        for t in sample_triples:
            f.write(json.dumps({"subject": t.subject, "predicate": t.predicate, "object": t.object}) + "\n")
        path = f.name
    yield path
    os.unlink(path)


@pytest.fixture
def temp_turtle_file() -> Iterator[str]:
    """Turtle file with a person and a place."""
    content = (
        "@prefix schema: <http://schema.org/> .\n"
        '<http://example.org/person1> a schema:Person ; schema:name "Alice Smith" .\n'
        '<http://example.org/place1> schema:name "Central Park" .\n'
        '_:b0 schema:name "Anonymous" .\n'
    )
    with tempfile.NamedTemporaryFile(mode="w", suffix=".ttl", delete=False) as f:
        f.write(content)
        path = f.name
    yield path
    os.unlink(path)


@pytest.fixture
def temp_text_file() -> Iterator[str]:
    with tempfile.NamedTemporaryFile(mode="w", suffix=".txt", delete=False) as f:
        f.write("Alice Smith walked through Central Park with Zed.")
        path = f.name
    yield path
    os.unlink(path)


@pytest.fixture
def temp_cache_dir() -> Iterator[str]:
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


# ---------------------------------------------------------------------------
# Configuration fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def minimal_config_dict(temp_triples_file: str) -> Dict:
    """Config using only lightweight components."""
    return {
        "triple_store": {"name": "memory", "params": {"path": temp_triples_file}},
        "search_index": {"name": "bm25", "params": {"top_k": 10}},
        "disambiguator": {"name": "greedy", "params": {}},
        "recognizer": {"name": "simple", "params": {"min_len": 3}},
        "minter": {"name": "genid", "params": {}},
        "loader": {"name": "text", "params": {}},
        "namespace": "kg.example.org",
    }


@pytest.fixture
def temp_config_file(minimal_config_dict: Dict) -> Iterator[str]:
    with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
        json.dump(minimal_config_dict, f)
        path = f.name
    yield path
    os.unlink(path)
