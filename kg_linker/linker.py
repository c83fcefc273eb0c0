"""
Entity linking against the knowledge graph.

``EntityLinker`` searches for each mention, hands the response to a
disambiguation policy and pairs the mention with the chosen subject. Batch
linking searches every distinct mention text once, concurrently, and joins
the results back in input order.
"""

import asyncio
import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from kg_linker.disambiguators.base import Disambiguator
from kg_linker.errors import NoCandidatesError
from kg_linker.search.adapter import CandidateSearchAdapter
from kg_linker.types import (
    EntityMention,
    ExtractedEntity,
    LinkedEntity,
    Offset,
    SearchResponse,
)

logger = logging.getLogger(__name__)


class SearchCache:
    """In-flight searches of one batch, keyed by exact mention text."""

    def __init__(self, search: CandidateSearchAdapter) -> None:
        self._search = search
        self._tasks: Dict[str, "asyncio.Task[SearchResponse]"] = {}

    def get(self, text: str) -> "asyncio.Task[SearchResponse]":
        task = self._tasks.get(text)
        if task is None:
            task = asyncio.ensure_future(self._search.search(text))
            self._tasks[text] = task
        return task

    def __len__(self) -> int:
        return len(self._tasks)

    def cancel_pending(self) -> None:
        for task in self._tasks.values():
            if not task.done():
                task.cancel()


class EntityLinker:
    """Links entity mentions to existing subjects of the knowledge graph.

    With ``allow_unlinked`` set, a ``NoCandidatesError`` raised by a strict
    disambiguator for one text leaves the mentions with that text unlinked
    instead of failing the whole batch.
    """

    def __init__(self, search: CandidateSearchAdapter, disambiguator: Disambiguator) -> None:
        self.search = search
        self.disambiguator = disambiguator

    async def link_entities(
        self, mentions: Iterable[EntityMention], allow_unlinked: bool = False
    ) -> List[LinkedEntity]:
        mentions = list(mentions)
        if not mentions:
            return []

        cache = SearchCache(self.search)
        try:
            if self.disambiguator.reuse_decisions:
                texts = list(dict.fromkeys(m.text for m in mentions))
                outcomes = await asyncio.gather(
                    *(self._decide(text, cache, allow_unlinked) for text in texts)
                )
                decided = dict(zip(texts, outcomes))
                linked = [self._pair(m, *decided[m.text]) for m in mentions]
            else:
                linked = list(
                    await asyncio.gather(
                        *(self._link_cached(m, cache, allow_unlinked) for m in mentions)
                    )
                )
        finally:
            cache.cancel_pending()

        logger.debug(
            f"Linked {len(mentions)} mentions with {len(cache)} searches, "
            f"{sum(1 for le in linked if le.is_linked)} matched"
        )
        return linked

    async def link_entity(self, mention: EntityMention) -> LinkedEntity:
        response = await self.search.search(mention.text)
        subject = await self.disambiguator.disambiguate(response)
        return self._pair(mention, response, subject)

    async def link_extracted_entities(
        self, entities: Sequence[ExtractedEntity], allow_unlinked: bool = False
    ) -> Dict[str, LinkedEntity]:
        """Link entities read from a Turtle fragment, keyed by placeholder id.

        Entities without a ``schema:name`` are not searched and are left out
        of the result.
        """
        named = [entity for entity in entities if entity.named]
        mentions = [
            EntityMention(
                text=entity.entity_name,
                offset=Offset(index=i, start=0, length=max(len(entity.entity_name), 1)),
                label=entity.entity_type,
            )
            for i, entity in enumerate(named)
        ]
        linked = await self.link_entities(mentions, allow_unlinked=allow_unlinked)
        return {entity.placeholder_id: le for entity, le in zip(named, linked)}

    async def _decide(
        self, text: str, cache: SearchCache, allow_unlinked: bool = False
    ) -> Tuple[SearchResponse, Optional[str]]:
        response = await cache.get(text)
        try:
            return response, await self.disambiguator.disambiguate(response)
        except NoCandidatesError:
            if not allow_unlinked:
                raise
            logger.info(f"No candidates for {text!r}, leaving it unlinked")
            return response, None

    async def _link_cached(
        self, mention: EntityMention, cache: SearchCache, allow_unlinked: bool = False
    ) -> LinkedEntity:
        response, subject = await self._decide(mention.text, cache, allow_unlinked)
        return self._pair(mention, response, subject)

    @staticmethod
    def _pair(
        mention: EntityMention, response: SearchResponse, subject: Optional[str]
    ) -> LinkedEntity:
        if subject is None:
            return LinkedEntity(entity=mention, hit=None)
        hit = next((h for h in response.hits if h.subject == subject), None)
        return LinkedEntity(entity=mention, hit=hit, subject=subject)
