import inspect
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

# Ensure component registration by importing modules with registry decorators.
from kg_linker import disambiguators as _disamb_pkg  # noqa: F401
from kg_linker import loaders as _loaders_pkg  # noqa: F401
from kg_linker import minting as _minting_mod  # noqa: F401
from kg_linker import recognizers as _recognizers_pkg  # noqa: F401
from kg_linker import search as _search_pkg  # noqa: F401
from kg_linker import triple_stores as _stores_pkg  # noqa: F401

from .config import LinkerConfig
from .linker import EntityLinker
from .placeholders import (
    PlaceholderResolver,
    extract_entities_from_turtle,
    replace_placeholder_ids,
)
from .registry import (
    disambiguators,
    loaders,
    minters,
    recognizers,
    search_indexes,
    triple_stores,
)
from .search.adapter import CandidateSearchAdapter
from .types import Document, LinkedEntity

logger = logging.getLogger(__name__)

MODES = ("text", "turtle")


def _accepts(factory: Any, param: str) -> bool:
    try:
        return param in inspect.signature(factory).parameters
    except (TypeError, ValueError):
        return False


def _link_to_dict(link: LinkedEntity) -> Dict[str, Any]:
    return {
        "text": link.entity.text,
        "start": link.entity.offset.start,
        "end": link.entity.offset.end,
        "label": link.entity.label,
        "subject": link.subject,
        "score": link.hit.score if link.hit else None,
        "minted": link.is_minted,
    }


class LinkingPipeline:
    """Wires store, index, disambiguator, recognizer and resolver from config."""

    def __init__(self, config: LinkerConfig) -> None:
        self.config = config

        store_factory = triple_stores.get(config.triple_store.name)
        self.store = store_factory(**config.triple_store.params)

        index_factory = search_indexes.get(config.search_index.name)
        self.index = index_factory(store=self.store, **config.search_index.params)
        self.search = CandidateSearchAdapter(self.index, timeout=config.search_timeout)

        minter_factory = minters.get(config.minter.name)
        minter_params = dict(config.minter.params)
        if _accepts(minter_factory, "namespace"):
            minter_params.setdefault("namespace", config.namespace)
        self.minter = minter_factory(**minter_params)

        disamb_factory = disambiguators.get(config.disambiguator.name)
        disamb_params = dict(config.disambiguator.params)
        if _accepts(disamb_factory, "minter"):
            disamb_params.setdefault("minter", self.minter)
        self.disambiguator = disamb_factory(**disamb_params)

        recognizer_factory = recognizers.get(config.recognizer.name)
        self.recognizer = recognizer_factory(**config.recognizer.params)

        loader_factory = loaders.get(config.loader.name)
        self.loader = loader_factory(**config.loader.params)

        self.linker = EntityLinker(self.search, self.disambiguator)
        self.resolver = PlaceholderResolver(self.minter)

    async def link_text(self, text: str) -> List[LinkedEntity]:
        mentions = [m for m in self.recognizer.extract(text) if m.within(len(text))]
        return await self.linker.link_entities(mentions, allow_unlinked=True)

    async def resolve_fragment(self, fragment: str) -> Dict[str, Any]:
        """Link the entities of a placeholder fragment and substitute identifiers."""
        entities = extract_entities_from_turtle(fragment)
        links = await self.linker.link_extracted_entities(entities, allow_unlinked=True)
        mapping = self.resolver.build_mapping(fragment, links)
        turtle = replace_placeholder_ids(fragment, mapping)
        return {
            "turtle": turtle,
            "placeholders": [
                {
                    "placeholder": placeholder,
                    "subject": subject,
                    "entity_name": links[placeholder].entity.text if placeholder in links else None,
                    "linked": placeholder in links and links[placeholder].is_linked,
                }
                for placeholder, subject in mapping.items()
            ],
        }

    def ingest_fragment(self, turtle: str) -> int:
        """Merge a resolved fragment into the triple store."""
        add_turtle = getattr(self.store, "add_turtle", None)
        if add_turtle is None:
            raise ValueError(
                f"Triple store '{self.config.triple_store.name}' cannot ingest Turtle."
            )
        added = add_turtle(turtle)
        logger.info(f"Ingested {added} triples")
        return added

    async def process_document(self, doc: Document, mode: str = "text") -> Dict[str, Any]:
        if mode == "turtle":
            resolved = await self.resolve_fragment(doc.text)
            return {"id": doc.id, **resolved, "meta": doc.meta}
        linked = await self.link_text(doc.text)
        return {
            "id": doc.id,
            "text": doc.text,
            "entities": [_link_to_dict(link) for link in linked],
            "meta": doc.meta,
        }

    async def run(
        self,
        paths: Iterable[str],
        output_path: Optional[str] = None,
        mode: str = "text",
    ) -> List[Dict[str, Any]]:
        if mode not in MODES:
            raise ValueError(f"Unknown mode: {mode}")
        results: List[Dict[str, Any]] = []
        writer = None
        if output_path:
            writer = Path(output_path).open("w", encoding="utf-8")

        try:
            for path in paths:
                for doc in self.loader.load(path):
                    result = await self.process_document(doc, mode=mode)
                    if writer:
                        writer.write(json.dumps(result) + "\n")
                    results.append(result)
        finally:
            if writer:
                writer.close()

        return results
