from __future__ import annotations
import logging
from typing import Optional

from fastapi import FastAPI, Query
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field

from .config import Config, setup_logging
from .generate import SamplingExhausted, format_ball, generate
from .insight import InsightClient
from .session import PickerSession
from .settings import GeneratorSettings, SettingsError

logger = logging.getLogger(__name__)

MAX_COUNT = 10_000


class SettingsPatch(BaseModel):
    min: Optional[int] = None
    max: Optional[int] = None
    count: Optional[int] = Field(None, le=MAX_COUNT)
    unique: Optional[bool] = None
    sorted: Optional[bool] = None


def _error(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": message})


def _draw_body(numbers):
    return {"numbers": numbers, "labels": [format_ball(n) for n in numbers]}


def create_app(config: Config | None = None, client: InsightClient | None = None) -> FastAPI:
    config = config or Config.from_env()
    setup_logging(config.log_level)
    client = client or InsightClient.from_config(config)
    session = PickerSession(fetcher=client.fetch_async)

    app = FastAPI(title="Lottopick API")
    app.state.session = session

    # ----- Static mounting -----
    static_dir = config.static_dir
    if static_dir is not None and static_dir.exists():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

        @app.get("/", response_class=HTMLResponse)
        def root_html():
            index_path = static_dir / "index.html"
            if index_path.exists():
                return FileResponse(str(index_path))
            return PlainTextResponse("Lottopick API - static index.html missing", status_code=500)
    else:
        @app.get("/", response_class=PlainTextResponse)
        def root():
            return "Lottopick API - try POST /generate then POST /insight"

    # ----- Session endpoints -----
    # async: session state is only touched from the event loop
    @app.get("/state")
    async def state():
        return session.snapshot()

    @app.get("/settings")
    async def get_settings():
        return session.snapshot()["settings"]

    @app.put("/settings")
    async def put_settings(patch: SettingsPatch):
        session.update_settings(**patch.model_dump(exclude_unset=True, exclude_none=True))
        return session.snapshot()["settings"]

    @app.post("/generate")
    async def generate_numbers(seed: int | None = None):
        try:
            numbers = session.generate_numbers(seed=seed)
        except SamplingExhausted as e:
            logger.error("Sampling gave up: %s", e)
            return _error(500, str(e))
        if numbers is None:
            return _error(422, session.error or "invalid settings")
        return _draw_body(numbers)

    @app.post("/clear")
    async def clear():
        session.clear()
        return session.snapshot()

    @app.get("/clipboard", response_class=PlainTextResponse)
    async def clipboard():
        text = session.clipboard_text()
        if text is None:
            return PlainTextResponse("", status_code=404)
        return text

    @app.post("/insight")
    async def insight():
        if not session.results:
            return _error(409, "Nothing generated yet")
        if session.loading_ai:
            return _error(429, "Insight already in progress")
        result = await session.request_insight()
        return {"insight": result.model_dump() if result else None}

    # ----- Stateless draw -----
    @app.get("/draw")
    def draw(
        min_: int = Query(1, alias="min"),
        max_: int = Query(60, alias="max"),
        count: int = Query(6, le=MAX_COUNT),
        unique: bool = True,
        sorted_: bool = Query(True, alias="sorted"),
        seed: int | None = None,
    ):
        settings = GeneratorSettings(min=min_, max=max_, count=count, unique=unique, sorted=sorted_)
        try:
            return _draw_body(generate(settings, seed=seed))
        except SettingsError as e:
            return _error(422, e.message)
        except SamplingExhausted as e:
            return _error(500, str(e))

    return app


app = create_app()
