from __future__ import annotations
import logging
from dataclasses import asdict
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from .generate import format_numbers, generate
from .insight import AIInsight, InsightClient
from .settings import GeneratorSettings, SettingsError

logger = logging.getLogger(__name__)

InsightFetcher = Callable[[Sequence[int]], Awaitable[Optional[AIInsight]]]


class PickerSession:
    """State of one picker: settings, last draw, oracle reply.

    Mutated only by its owner's control flow. The oracle fetch is the one
    suspending call; a second fetch while one is in flight is refused, and a
    reply that arrives after the numbers changed is dropped.
    """

    def __init__(
        self,
        fetcher: InsightFetcher | None = None,
        settings: GeneratorSettings | None = None,
    ):
        self.settings = settings or GeneratorSettings()
        self.results: List[int] = []
        self.insight: Optional[AIInsight] = None
        self.error: Optional[str] = None
        self.loading_ai = False
        self._fetcher = fetcher or InsightClient().fetch_async
        self._generation = 0

    def update_settings(self, **changes) -> GeneratorSettings:
        self.settings = self.settings.replace(**changes)
        return self.settings

    def generate_numbers(self, seed: int | None = None) -> Optional[List[int]]:
        self.error = None
        try:
            numbers = generate(self.settings, seed=seed)
        except SettingsError as e:
            self.error = e.message
            logger.info("Generation refused: %s", e.message)
            return None
        self._generation += 1
        self.results = numbers
        self.insight = None
        return numbers

    def clear(self) -> None:
        self._generation += 1
        self.results = []
        self.insight = None

    def clipboard_text(self) -> Optional[str]:
        if not self.results:
            return None
        return format_numbers(self.results)

    async def request_insight(self) -> Optional[AIInsight]:
        if not self.results or self.loading_ai:
            return None
        generation = self._generation
        self.loading_ai = True
        try:
            insight = await self._fetcher(list(self.results))
        finally:
            self.loading_ai = False
        if generation != self._generation:
            logger.debug("Dropping insight for a draw that is no longer shown")
            return None
        self.insight = insight
        return insight

    def snapshot(self) -> Dict[str, Any]:
        return {
            "settings": asdict(self.settings),
            "results": list(self.results),
            "insight": self.insight.model_dump() if self.insight else None,
            "error": self.error,
            "loading_ai": self.loading_ai,
        }
