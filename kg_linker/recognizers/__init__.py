"""Entity mention recognizers."""

from .simple import SimpleRegexRecognizer  # noqa: F401
from .spacy import SpacyRecognizer  # noqa: F401
