"""Unit tests for CandidateSearchAdapter."""

import asyncio

import pytest

from kg_linker.errors import SearchFailure
from kg_linker.search.adapter import CandidateSearchAdapter, dedupe_hits
from kg_linker.types import SearchHit

from tests.conftest import MockSearchIndex


class TestDedupeHits:
    """Tests for dedupe_hits."""

    def test_keeps_max_score_and_its_snapshot(self):
        hits = [
            SearchHit("http://example.org/p1", 1.0, "name", "Alice Smith"),
            SearchHit("http://example.org/p1", 3.0, "description", "Alice is an engineer"),
            SearchHit("http://example.org/p1", 2.0, "jobTitle", "Senior Alice Developer"),
        ]
        deduped = dedupe_hits(hits)
        assert len(deduped) == 1
        assert deduped[0].score == 3.0
        assert deduped[0].predicate == "description"

    def test_equal_scores_keep_first_seen_snapshot(self):
        hits = [
            SearchHit("http://example.org/p1", 2.0, "name", "Alice"),
            SearchHit("http://example.org/p1", 2.0, "alias", "Al"),
        ]
        assert dedupe_hits(hits)[0].predicate == "name"

    def test_sorted_descending_and_stable_on_ties(self):
        hits = [
            SearchHit("s3", 0.5),
            SearchHit("s1", 0.9),
            SearchHit("s2", 0.9),
        ]
        assert [h.subject for h in dedupe_hits(hits)] == ["s1", "s2", "s3"]

    def test_replaced_subject_keeps_first_seen_position_on_ties(self):
        hits = [
            SearchHit("a", 0.1),
            SearchHit("b", 0.9),
            SearchHit("a", 0.9),
        ]
        assert [h.subject for h in dedupe_hits(hits)] == ["a", "b"]


class TestCandidateSearchAdapter:
    """Tests for CandidateSearchAdapter class."""

    @pytest.mark.asyncio
    async def test_response_carries_text_and_deduped_hits(self):
        index = MockSearchIndex(
            hits={
                "Alice": [
                    SearchHit("http://example.org/p2", 1.0),
                    SearchHit("http://example.org/p1", 2.0),
                    SearchHit("http://example.org/p2", 4.0),
                ]
            }
        )
        response = await CandidateSearchAdapter(index).search("Alice")
        assert response.text == "Alice"
        assert [(h.subject, h.score) for h in response.hits] == [
            ("http://example.org/p2", 4.0),
            ("http://example.org/p1", 2.0),
        ]

    @pytest.mark.asyncio
    async def test_no_match_is_empty_not_error(self, mock_index):
        response = await CandidateSearchAdapter(mock_index).search("Mars")
        assert response.hits == []

    @pytest.mark.asyncio
    async def test_empty_text_is_legal(self, mock_index):
        response = await CandidateSearchAdapter(mock_index).search("")
        assert response.text == ""
        assert response.hits == []

    @pytest.mark.asyncio
    async def test_does_not_fold_case(self):
        index = MockSearchIndex(hits={"alice": [SearchHit("http://example.org/p1", 1.0)]})
        adapter = CandidateSearchAdapter(index)
        assert (await adapter.search("Alice")).hits == []
        assert index.queries == ["Alice"]

    @pytest.mark.asyncio
    async def test_index_error_becomes_search_failure(self):
        error = RuntimeError("index corrupted")
        adapter = CandidateSearchAdapter(MockSearchIndex(error=error))
        with pytest.raises(SearchFailure) as excinfo:
            await adapter.search("Alice")
        assert excinfo.value.query == "Alice"
        assert excinfo.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_search_failure_passes_through(self):
        failure = SearchFailure("Alice", "backend offline")
        adapter = CandidateSearchAdapter(MockSearchIndex(error=failure))
        with pytest.raises(SearchFailure) as excinfo:
            await adapter.search("Alice")
        assert excinfo.value is failure

    @pytest.mark.asyncio
    async def test_timeout_becomes_search_failure(self):
        index = MockSearchIndex(delays={"slow": 1.0})
        adapter = CandidateSearchAdapter(index, timeout=0.01)
        with pytest.raises(SearchFailure, match="timed out"):
            await adapter.search("slow")

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        index = MockSearchIndex(delays={"slow": 1.0})
        task = asyncio.ensure_future(CandidateSearchAdapter(index).search("slow"))
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    def test_requires_index(self):
        with pytest.raises(ValueError):
            CandidateSearchAdapter(None)
