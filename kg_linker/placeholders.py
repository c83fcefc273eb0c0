"""
Placeholder substitution for generated Turtle fragments.

Generated fragments refer to entities whose identifiers are not yet known
as ``<PLACEHOLDER_ENTITY_N>``. Resolution maps every distinct placeholder
to one identifier, either the subject of a linked entity or a freshly
minted IRI, and substitutes all occurrences in a single scan.
"""

import logging
import re
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from kg_linker.errors import UnresolvedPlaceholderError
from kg_linker.minting import GenidMinter, IdentifierMinter
from kg_linker.types import ExtractedEntity, LinkedEntity

logger = logging.getLogger(__name__)

PLACEHOLDER_PREFIX = "PLACEHOLDER_ENTITY_"
# only the bracketed IRI form is a placeholder
PLACEHOLDER_PATTERN = re.compile(r"<(PLACEHOLDER_ENTITY_\d+)>")

SCHEMA_PREFIX = "schema:"
SCHEMA_NAMESPACE = "https://schema.org/"

_NAME_PATTERN = re.compile(
    r'(?:schema:name|<https?://schema\.org/name>)\s+"((?:[^"\\]|\\.)*)"'
)

Links = Union[Sequence[LinkedEntity], Mapping[str, LinkedEntity]]


def placeholder_id(n: int) -> str:
    return f"{PLACEHOLDER_PREFIX}{n}"


def extract_placeholder_ids(fragment: str) -> List[str]:
    """Return the distinct placeholders of ``fragment`` in order of first appearance."""
    return list(dict.fromkeys(PLACEHOLDER_PATTERN.findall(fragment)))


def _expand_type(entity_type: str) -> str:
    if entity_type.startswith("<") and entity_type.endswith(">"):
        return entity_type[1:-1]
    if entity_type.startswith(SCHEMA_PREFIX):
        return SCHEMA_NAMESPACE + entity_type[len(SCHEMA_PREFIX):]
    return entity_type


def _entity_block(fragment: str, placeholder: str) -> str:
    """Text from the placeholder's subject statement up to the next placeholder block."""
    subject = re.search(rf"(?:^|\n)[ \t]*<{placeholder}>", fragment)
    if subject is not None:
        start = subject.end() - len(placeholder) - 2
    else:
        start = fragment.find(f"<{placeholder}>")
    if start < 0:
        return ""
    end = len(fragment)
    for match in re.finditer(r"\n\s*\n\s*<" + PLACEHOLDER_PREFIX, fragment[start:]):
        end = start + match.start()
        break
    return fragment[start:end]


def extract_entities_from_turtle(fragment: str) -> List[ExtractedEntity]:
    """Read the type and ``schema:name`` of each typed placeholder subject.

    Placeholders never used as the subject of an ``a <type>`` statement are
    skipped. Without a name the entity is marked unnamed and labelled
    ``Entity <placeholder>``.
    """
    entities: List[ExtractedEntity] = []
    for placeholder in extract_placeholder_ids(fragment):
        type_match = re.search(
            rf"<{placeholder}>\s+a\s+([^\s;,.]+(?:\.[^\s;,.]+)*)", fragment
        )
        if type_match is None:
            continue
        name_match = _NAME_PATTERN.search(_entity_block(fragment, placeholder))
        name = name_match.group(1) if name_match else f"Entity {placeholder}"
        entities.append(
            ExtractedEntity(
                placeholder_id=placeholder,
                entity_type=_expand_type(type_match.group(1)),
                entity_name=name,
                named=name_match is not None,
            )
        )
    return entities


def replace_placeholder_ids(fragment: str, mapping: Mapping[str, str]) -> str:
    """Substitute every ``<placeholder>`` with ``<identifier>``.

    Raises ``UnresolvedPlaceholderError`` for the first placeholder without
    a mapping entry; nothing is substituted in that case.
    """
    for placeholder in extract_placeholder_ids(fragment):
        if placeholder not in mapping:
            raise UnresolvedPlaceholderError(placeholder)
    return PLACEHOLDER_PATTERN.sub(lambda m: f"<{mapping[m.group(1)]}>", fragment)


def _normalize_name(name: str) -> str:
    return re.sub(r"[^a-z0-9]", "", name.lower())


class PlaceholderResolver:
    """Maps placeholders to linked or minted identifiers and substitutes them."""

    def __init__(self, minter: Optional[IdentifierMinter] = None) -> None:
        self.minter = minter or GenidMinter()

    def build_mapping(self, fragment: str, links: Links) -> Dict[str, str]:
        """Assign an identifier to every placeholder in ``fragment``.

        ``links`` is either a sequence of linked entities, matched to the
        fragment's entities by case-insensitive name, or a mapping from
        placeholder to linked entity. Placeholders without a linked subject
        get a minted IRI; named entities sharing a name and type share one,
        unnamed ones each get their own.
        """
        placeholders = extract_placeholder_ids(fragment)
        if not placeholders:
            return {}

        extracted = {e.placeholder_id: e for e in extract_entities_from_turtle(fragment)}
        if isinstance(links, Mapping):
            by_placeholder = dict(links)
        else:
            by_name: Dict[str, LinkedEntity] = {}
            for link in links:
                by_name.setdefault(link.entity.text.lower(), link)
            by_placeholder = {
                pid: by_name[entity.entity_name.lower()]
                for pid, entity in extracted.items()
                if entity.named and entity.entity_name.lower() in by_name
            }

        mapping: Dict[str, str] = {}
        minted: Dict[Tuple[str, str], str] = {}
        for placeholder in placeholders:
            link = by_placeholder.get(placeholder)
            if link is not None and link.subject is not None:
                mapping[placeholder] = link.subject
                continue
            entity = extracted.get(placeholder)
            if entity is None or not entity.named:
                mapping[placeholder] = self.minter()
                continue
            key = (_normalize_name(entity.entity_name), entity.entity_type)
            if key not in minted:
                minted[key] = self.minter()
                logger.debug(f"Minted {minted[key]} for {entity.entity_name!r} ({placeholder})")
            mapping[placeholder] = minted[key]
        return mapping

    def resolve(self, fragment: str, mapping: Mapping[str, str]) -> str:
        """Return ``fragment`` with every placeholder replaced from ``mapping``.

        Raises ``UnresolvedPlaceholderError`` when a placeholder has no entry.
        """
        if not PLACEHOLDER_PATTERN.search(fragment):
            return fragment
        return replace_placeholder_ids(fragment, mapping)

    def resolve_links(self, fragment: str, links: Links) -> str:
        """Return ``fragment`` with placeholders replaced by linked or minted identifiers."""
        if not PLACEHOLDER_PATTERN.search(fragment):
            return fragment
        return replace_placeholder_ids(fragment, self.build_mapping(fragment, links))
