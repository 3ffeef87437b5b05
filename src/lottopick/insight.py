"""Oracle commentary about a drawn set of numbers.

One request to Gemini's REST `generateContent` with a fixed prompt and a
fixed response schema. Without a credential a local fallback is returned.
Every remote failure ends in `None`; callers just hide the panel.
"""
from __future__ import annotations
import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence

import requests
from pydantic import BaseModel, ConfigDict, ValidationError

from .config import Config, DEFAULT_ENDPOINT, DEFAULT_MODEL, DEFAULT_TIMEOUT_SEC
from .generate import format_numbers

logger = logging.getLogger(__name__)


class AIInsight(BaseModel):
    model_config = ConfigDict(frozen=True)

    analysis: str
    funFact: str
    patternObserved: str


FALLBACK_INSIGHT = AIInsight(
    analysis="Estes números foram sorteados de forma uniforme: nenhum tem mais chance que outro.",
    funFact="Na Mega-Sena existem 50.063.860 combinações possíveis de 6 números entre 1 e 60.",
    patternObserved="O oráculo está offline, mas a sorte continua valendo.",
)

RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "analysis": {
            "type": "STRING",
            "description": "Uma breve análise dos números.",
        },
        "funFact": {
            "type": "STRING",
            "description": "Uma curiosidade matemática relacionada ao intervalo ou aos números.",
        },
        "patternObserved": {
            "type": "STRING",
            "description": "Qualquer padrão ou coincidência observada.",
        },
    },
    "required": ["analysis", "funFact", "patternObserved"],
}


def build_prompt(numbers: Sequence[int]) -> str:
    return (
        f"Analise estes números gerados aleatoriamente: {format_numbers(numbers)}.\n"
        "Forneça uma análise divertida em Português sobre possíveis padrões, "
        "curiosidades matemáticas ou 'vibe' desses números."
    )


def build_payload(numbers: Sequence[int]) -> Dict[str, Any]:
    return {
        "contents": [{"parts": [{"text": build_prompt(numbers)}]}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": RESPONSE_SCHEMA,
        },
    }


def _response_text(data: Dict[str, Any]) -> str:
    """Pull the generated text out of a generateContent reply."""
    return data["candidates"][0]["content"]["parts"][0]["text"]


class InsightClient:
    def __init__(
        self,
        api_key: str = "",
        model: str = DEFAULT_MODEL,
        timeout: float = DEFAULT_TIMEOUT_SEC,
        endpoint: str = DEFAULT_ENDPOINT,
        session: requests.Session | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.endpoint = endpoint.rstrip("/")
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: Config, session: requests.Session | None = None) -> "InsightClient":
        return cls(
            api_key=config.api_key,
            model=config.model,
            timeout=config.timeout,
            endpoint=config.endpoint,
            session=session,
        )

    @property
    def url(self) -> str:
        return f"{self.endpoint}/{self.model}:generateContent"

    def fetch(self, numbers: Sequence[int]) -> Optional[AIInsight]:
        if not numbers:
            return None
        if not self.api_key:
            logger.info("No API key configured, using local insight")
            return FALLBACK_INSIGHT

        try:
            resp = self.session.post(
                self.url,
                json=build_payload(numbers),
                headers={"x-goog-api-key": self.api_key},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            text = _response_text(resp.json())
            return AIInsight.model_validate_json(text)
        except (requests.RequestException, OSError):
            logger.warning("Insight request failed", exc_info=True)
        except (ValidationError, ValueError, KeyError, IndexError, TypeError):
            logger.warning("Insight response malformed", exc_info=True)
        return None

    async def fetch_async(self, numbers: Sequence[int]) -> Optional[AIInsight]:
        return await asyncio.to_thread(self.fetch, list(numbers))


def get_number_insights(numbers: List[int], config: Config | None = None) -> Optional[AIInsight]:
    client = InsightClient.from_config(config or Config.from_env())
    return client.fetch(numbers)
