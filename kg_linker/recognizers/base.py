from typing import List, Protocol

from kg_linker.types import EntityMention


class Recognizer(Protocol):
    """Extracts candidate entity mentions from raw text."""

    def extract(self, text: str) -> List[EntityMention]:
        ...
