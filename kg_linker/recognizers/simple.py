import re
from typing import List

from kg_linker.registry import recognizers
from kg_linker.types import EntityMention, Offset


@recognizers.register("simple")
class SimpleRegexRecognizer:
    """Lightweight regex recognizer for runs of capitalized words (no external deps)."""

    def __init__(self, min_len: int = 3):
        self.pattern = re.compile(
            r"\b([A-Z][\w'-]*(?:\s+[A-Z][\w'-]*)*)\b"
        )
        self.min_len = min_len

    def extract(self, text: str) -> List[EntityMention]:
        mentions: List[EntityMention] = []
        for match in self.pattern.finditer(text):
            span = match.group(1)
            if len(span) < self.min_len:
                continue
            mentions.append(
                EntityMention(
                    text=span,
                    offset=Offset(index=len(mentions), start=match.start(1), length=len(span)),
                    label="ENT",
                )
            )
        return mentions
