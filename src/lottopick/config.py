from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

DEFAULT_MODEL = "gemini-3-flash-preview"
DEFAULT_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_TIMEOUT_SEC = 15.0

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    api_key: str = ""
    model: str = DEFAULT_MODEL
    timeout: float = DEFAULT_TIMEOUT_SEC
    endpoint: str = DEFAULT_ENDPOINT
    log_level: str = "INFO"
    static_dir: Path | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Config":
        """
        Read settings from the environment.

        GEMINI_API_KEY       credential for the oracle (API_KEY also accepted)
        LOTTOPICK_MODEL      model id
        LOTTOPICK_ENDPOINT   base URL of the models REST API
        LOTTOPICK_TIMEOUT    request timeout in seconds, must be positive
        LOTTOPICK_LOG_LEVEL  logging level name
        LOTTOPICK_STATIC_DIR directory with an index.html to serve at /
        """
        env = os.environ if environ is None else environ

        timeout = DEFAULT_TIMEOUT_SEC
        raw_timeout = env.get("LOTTOPICK_TIMEOUT")
        if raw_timeout:
            try:
                parsed = float(raw_timeout)
            except ValueError:
                parsed = None
            if parsed is not None and parsed > 0:
                timeout = parsed
            else:
                logger.warning("Ignoring bad LOTTOPICK_TIMEOUT=%r", raw_timeout)

        log_level = (env.get("LOTTOPICK_LOG_LEVEL") or "INFO").upper()
        if not is_level_name(log_level):
            logger.warning("Ignoring bad LOTTOPICK_LOG_LEVEL=%r", log_level)
            log_level = "INFO"

        static = env.get("LOTTOPICK_STATIC_DIR")
        return cls(
            api_key=env.get("GEMINI_API_KEY") or env.get("API_KEY") or "",
            model=env.get("LOTTOPICK_MODEL") or DEFAULT_MODEL,
            timeout=timeout,
            endpoint=env.get("LOTTOPICK_ENDPOINT") or DEFAULT_ENDPOINT,
            log_level=log_level,
            static_dir=Path(static) if static else None,
        )


def is_level_name(name: str) -> bool:
    return isinstance(logging.getLevelName(name), int)


def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    if not is_level_name(level):
        logger.warning("Unknown log level %r, using INFO", level)
        level = "INFO"
    logging.getLogger("lottopick").setLevel(level)
