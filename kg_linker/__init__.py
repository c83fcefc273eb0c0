"""
Entity linking for knowledge-graph population.

Resolves entity mentions against a search-backed triple store, reusing
existing subjects where the graph already knows an entity and minting
genid IRIs otherwise, and substitutes the result into generated Turtle.
"""

__all__ = [
    "LinkerConfig",
    "LinkingPipeline",
    "EntityLinker",
    "PlaceholderResolver",
]

__version__ = "0.1.0"

from .config import LinkerConfig  # noqa: E402
from .linker import EntityLinker  # noqa: E402
from .pipeline import LinkingPipeline  # noqa: E402
from .placeholders import PlaceholderResolver  # noqa: E402
