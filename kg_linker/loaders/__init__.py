"""Document loaders."""

from .text import JSONLLoader, TextLoader  # noqa: F401
