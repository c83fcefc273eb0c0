"""Exceptions raised while linking mentions and resolving placeholders."""


class LinkingError(Exception):
    """Base class for entity linking errors."""


class SearchFailure(LinkingError):
    """The underlying search index could not be queried."""

    def __init__(self, query: str, message: str = "") -> None:
        self.query = query
        super().__init__(message or f"Search failed for query {query!r}")


class NoCandidatesError(LinkingError):
    """A strict disambiguator received a response without hits."""

    message = "No search hits available for disambiguation"

    def __init__(self, text: str = "") -> None:
        self.text = text
        super().__init__(self.message)


class UnresolvedPlaceholderError(LinkingError):
    """A fragment contains a placeholder missing from the mapping."""

    def __init__(self, placeholder: str) -> None:
        self.placeholder = placeholder
        super().__init__(f"No identifier mapped for placeholder {placeholder}")


class InvalidIdentifierError(LinkingError, ValueError):
    """A supplied identifier is not a syntactically valid IRI."""

    def __init__(self, value: str, reason: str = "") -> None:
        self.value = value
        detail = f": {reason}" if reason else ""
        super().__init__(f"Invalid IRI {value!r}{detail}")
