"""Search indexes over triple stores and the candidate search adapter."""

from .adapter import CandidateSearchAdapter  # noqa: F401
from .bm25 import BM25SearchIndex  # noqa: F401
from .fuzzy import FuzzySearchIndex  # noqa: F401
