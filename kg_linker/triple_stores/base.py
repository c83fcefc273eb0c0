from typing import Iterable, Protocol

from kg_linker.types import Triple


class TripleStore(Protocol):
    """Mutable set of triples that search indexes are built over.

    ``version`` increases on every mutation so indexes can rebuild lazily.
    """

    version: int

    def add(self, triple: Triple) -> bool:
        ...

    def remove(self, triple: Triple) -> bool:
        ...

    def find(self, triple: Triple) -> bool:
        ...

    def triples(self) -> Iterable[Triple]:
        ...

    def __len__(self) -> int:
        ...
