"""Minting and validation of entity identifiers."""

import logging
import re
import uuid
from typing import Callable

from kg_linker.errors import InvalidIdentifierError
from kg_linker.registry import minters

logger = logging.getLogger(__name__)

IdentifierMinter = Callable[[], str]

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
_FORBIDDEN = re.compile(r"[\s<>\"{}|\\^`]")


def genid(id: str, namespace: str = "example.org") -> str:
    """Wrap an opaque id in a well-known genid IRI."""
    return f"https://{namespace}/.well-known/genid/{id}"


def validate_iri(value: str) -> str:
    """Return ``value`` unchanged if it is an absolute IRI, else raise."""
    if not value:
        raise InvalidIdentifierError(value, "empty")
    match = _SCHEME.match(value)
    if match is None:
        raise InvalidIdentifierError(value, "missing scheme")
    if match.end() == len(value):
        raise InvalidIdentifierError(value, "nothing after scheme")
    bad = _FORBIDDEN.search(value)
    if bad is not None:
        raise InvalidIdentifierError(value, f"forbidden character {bad.group(0)!r}")
    return value


@minters.register("genid")
class GenidMinter:
    """Mints random UUID-based genid IRIs under a namespace."""

    def __init__(self, namespace: str = "example.org") -> None:
        if not namespace or "/" in namespace:
            raise ValueError(f"Namespace must be a bare host name, got {namespace!r}")
        self.namespace = namespace

    def __call__(self) -> str:
        iri = genid(str(uuid.uuid4()), self.namespace)
        logger.debug(f"Minted identifier {iri}")
        return iri
