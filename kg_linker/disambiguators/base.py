from typing import Optional, Protocol

from kg_linker.types import SearchResponse


class Disambiguator(Protocol):
    """Selects at most one subject from a search response.

    ``reuse_decisions`` tells the linker whether one decision may be shared
    by every mention with the same text in a batch.
    """

    reuse_decisions: bool

    async def disambiguate(self, response: SearchResponse) -> Optional[str]:
        ...
