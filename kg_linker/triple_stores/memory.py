import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from kg_linker.registry import triple_stores
from kg_linker.types import Triple

logger = logging.getLogger(__name__)


@triple_stores.register("memory")
class InMemoryTripleStore:
    """Insertion-ordered triple set, optionally seeded from a JSONL file.

    Each JSONL line holds ``subject``, ``predicate`` and ``object`` fields.
    """

    def __init__(self, path: Optional[str] = None, triples: Optional[Iterable[Triple]] = None):
        self._triples: Dict[Triple, None] = {}
        self.version = 0
        if path:
            self._load_jsonl(path)
        for triple in triples or ():
            self.add(triple)

    def _load_jsonl(self, path: str) -> None:
        with Path(path).open(encoding="utf-8") as f:
            for line_num, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                item = json.loads(line)
                try:
                    triple = Triple(
                        subject=item["subject"],
                        predicate=item["predicate"],
                        object=item["object"],
                    )
                except KeyError as exc:
                    logger.warning(f"Skipping line {line_num} of {path}: missing {exc}")
                    continue
                self.add(triple)
        logger.info(f"Loaded {len(self)} triples from {path}")

    def add(self, triple: Triple) -> bool:
        if triple in self._triples:
            return False
        self._triples[triple] = None
        self.version += 1
        return True

    def remove(self, triple: Triple) -> bool:
        if triple not in self._triples:
            return False
        del self._triples[triple]
        self.version += 1
        return True

    def find(self, triple: Triple) -> bool:
        return triple in self._triples

    def triples(self) -> List[Triple]:
        return list(self._triples)

    def __len__(self) -> int:
        return len(self._triples)
