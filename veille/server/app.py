"""HTTP API: trigger an ingestion run and read stored articles."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Config
from ..log import configure_logging
from ..runtime import Runtime, build_runtime

log = logging.getLogger(__name__)


def error_response(error: str, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": error, "details": str(exc)})


def _runtime(request: Request) -> Runtime:
    return request.app.state.runtime


def create_app(config: Optional[Config] = None, runtime: Optional[Runtime] = None) -> FastAPI:
    """Build the API. A prebuilt runtime skips client creation at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown logic."""
        owned = app.state.runtime is None
        if owned:
            configure_logging()
            # Missing settings or an unreachable schema stop the server here.
            app.state.runtime = await asyncio.to_thread(build_runtime, config or Config())
        yield
        if owned:
            await app.state.runtime.close()

    app = FastAPI(
        title="veille",
        description="Royal Moroccan Navy news watch - API server",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.runtime = runtime

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.post("/api/fetch-articles")
    async def fetch_articles(request: Request):
        pipeline = _runtime(request).pipeline()
        try:
            summary = await pipeline.run()
        except Exception as e:
            log.exception("Error in fetch-articles route")
            return error_response("Failed to process articles", e)

        if not summary.success:
            return JSONResponse(
                status_code=404,
                content={"success": False, "message": summary.message},
            )
        return {"success": True, "message": summary.message}

    @app.get("/api/articles")
    async def list_articles(request: Request, limit: Optional[int] = Query(None, ge=1, le=1000)):
        store = _runtime(request).store
        try:
            rows = await asyncio.to_thread(store.list_recent, limit)
        except Exception as e:
            log.exception("Error reading articles")
            return error_response("Failed to load articles", e)
        return {"articles": rows}

    return app


load_dotenv()

app = create_app()
