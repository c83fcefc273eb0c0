import asyncio
import logging
from typing import Awaitable, Callable, Optional

from kg_linker.errors import InvalidIdentifierError
from kg_linker.minting import GenidMinter, IdentifierMinter, validate_iri
from kg_linker.registry import disambiguators
from kg_linker.types import SearchResponse

logger = logging.getLogger(__name__)

Prompt = Callable[[str], Awaitable[str]]

FALLBACKS = ("mint", "manual")


async def _console_prompt(message: str) -> str:
    return await asyncio.to_thread(input, message)


@disambiguators.register("interactive")
class InteractiveDisambiguator:
    """Asks an operator to pick among the ranked candidates.

    Choosing ``0`` (or an empty answer) means "none of these". The operator
    is then asked for an IRI when ``fallback="manual"`` (blank mints one),
    or an identifier is minted directly when ``fallback="mint"``. Prompts
    from concurrent linking tasks are serialised.
    """

    reuse_decisions = False

    def __init__(
        self,
        fallback: str = "mint",
        minter: Optional[IdentifierMinter] = None,
        prompt: Optional[Prompt] = None,
        output: Callable[[str], None] = print,
    ):
        if fallback not in FALLBACKS:
            raise ValueError(f"Unknown fallback '{fallback}', expected one of {FALLBACKS}")
        self.fallback = fallback
        self.minter = minter or GenidMinter()
        self.prompt = prompt or _console_prompt
        self.output = output
        self._lock = asyncio.Lock()

    async def disambiguate(self, response: SearchResponse) -> Optional[str]:
        async with self._lock:
            if response.hits:
                choice = await self._select(response)
                if choice is not None:
                    return response.hits[choice].subject
            else:
                self.output(f"No candidates found for '{response.text}'.")
            return await self._fall_back(response.text)

    async def _select(self, response: SearchResponse) -> Optional[int]:
        self.output(f"Candidates for '{response.text}':")
        for number, hit in enumerate(response.hits, start=1):
            self.output(f"  {number}) {hit.subject} (score: {hit.score:.2f})")
        self.output("  0) none of these")
        while True:
            answer = (await self.prompt("Select a candidate: ")).strip()
            if answer in ("", "0"):
                return None
            if answer.isdigit() and 1 <= int(answer) <= len(response.hits):
                return int(answer) - 1
            self.output(f"Please enter a number between 0 and {len(response.hits)}.")

    async def _fall_back(self, text: str) -> str:
        if self.fallback == "mint":
            return self._mint(text)
        while True:
            answer = (await self.prompt(f"IRI for '{text}' (blank to mint): ")).strip()
            if not answer:
                return self._mint(text)
            try:
                return validate_iri(answer)
            except InvalidIdentifierError as exc:
                self.output(str(exc))

    def _mint(self, text: str) -> str:
        iri = self.minter()
        logger.info(f"Minted {iri} for '{text}'")
        return iri
