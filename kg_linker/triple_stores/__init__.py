"""Triple stores backing the search indexes."""

from .memory import InMemoryTripleStore  # noqa: F401
from .turtle import TurtleTripleStore  # noqa: F401
