"""Unit tests for SpacyRecognizer using a blank pipeline with an entity ruler."""

import pytest

from kg_linker.recognizers.spacy import SpacyRecognizer


class TestSpacyRecognizer:
    """Tests for SpacyRecognizer class."""

    @pytest.fixture
    def recognizer(self) -> SpacyRecognizer:
        return SpacyRecognizer(
            model="blank:en",
            patterns=[
                {"label": "PERSON", "pattern": "Kyle"},
                {"label": "GPE", "pattern": [{"LOWER": "new"}, {"LOWER": "york"}]},
            ],
        )

    def test_extracts_ruler_entities(self, recognizer):
        text = "Kyle moved to New York."
        mentions = recognizer.extract(text)
        assert [(m.text, m.label) for m in mentions] == [("Kyle", "PERSON"), ("New York", "GPE")]
        for m in mentions:
            assert text[m.offset.start:m.offset.end] == m.text

    def test_blank_without_patterns_finds_nothing(self):
        assert SpacyRecognizer(model="blank:en").extract("Kyle moved to New York.") == []
