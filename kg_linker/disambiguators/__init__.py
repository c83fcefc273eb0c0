"""Entity disambiguators."""

from .greedy import (  # noqa: F401
    GreedyDisambiguator,
    MintingGreedyDisambiguator,
    StrictGreedyDisambiguator,
)
from .interactive import InteractiveDisambiguator  # noqa: F401
