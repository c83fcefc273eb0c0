import logging
from typing import Optional

import rdflib

from kg_linker.registry import triple_stores
from kg_linker.triple_stores.memory import InMemoryTripleStore
from kg_linker.types import Triple

logger = logging.getLogger(__name__)


@triple_stores.register("turtle")
class TurtleTripleStore(InMemoryTripleStore):
    """Triple store fed from Turtle documents.

    Only triples with an IRI subject and a literal object are kept: those are
    the ones a mention can be matched against, and blank node subjects cannot
    be reused as identifiers.
    """

    def __init__(self, path: Optional[str] = None, format: str = "turtle"):
        super().__init__()
        self.format = format
        if path:
            graph = rdflib.Graph()
            graph.parse(path, format=format)
            added = self._add_graph(graph)
            logger.info(f"Loaded {added} literal triples from {path}")

    def add_turtle(self, data: str) -> int:
        """Parse a Turtle fragment and merge its literal triples."""
        graph = rdflib.Graph()
        graph.parse(data=data, format=self.format)
        return self._add_graph(graph)

    def _add_graph(self, graph: rdflib.Graph) -> int:
        added = 0
        for s, p, o in sorted(graph):
            if not isinstance(s, rdflib.URIRef) or not isinstance(o, rdflib.Literal):
                continue
            if self.add(Triple(subject=str(s), predicate=str(p), object=str(o))):
                added += 1
        return added
