"""
Greedy disambiguation strategies.

All three pick the first hit of the response, which the search adapter has
already sorted by descending score (ties keep their original order). They
differ only in what happens when there are no hits.
"""

from typing import Optional

from kg_linker.errors import NoCandidatesError
from kg_linker.minting import GenidMinter, IdentifierMinter
from kg_linker.registry import disambiguators
from kg_linker.types import SearchResponse


@disambiguators.register("greedy")
class GreedyDisambiguator:
    """Returns the highest-scored subject, or ``None`` without hits."""

    reuse_decisions = True

    async def disambiguate(self, response: SearchResponse) -> Optional[str]:
        if not response.hits:
            return self._no_hits(response)
        return response.hits[0].subject

    def _no_hits(self, response: SearchResponse) -> Optional[str]:
        return None


@disambiguators.register("greedy_mint")
class MintingGreedyDisambiguator(GreedyDisambiguator):
    """Falls back to a freshly minted identifier without hits."""

    def __init__(self, minter: Optional[IdentifierMinter] = None):
        self.minter = minter or GenidMinter()

    def _no_hits(self, response: SearchResponse) -> Optional[str]:
        return self.minter()


@disambiguators.register("greedy_strict")
class StrictGreedyDisambiguator(GreedyDisambiguator):
    """Raises ``NoCandidatesError`` without hits."""

    def _no_hits(self, response: SearchResponse) -> Optional[str]:
        raise NoCandidatesError(response.text)
