from __future__ import annotations

from typing import List

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .hints import CatalogError, HintRecord
from .search import HintSearchEngine, TreeItem, is_blank_query


class SearchPayload(BaseModel):
    message: str


def _tree_items(engine: HintSearchEngine) -> List[TreeItem]:
    return [engine.get_tree_item(element) for element in engine.get_children()]


def create_app(engine: HintSearchEngine) -> FastAPI:
    app = FastAPI(title="Error Hint Explorer")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.revision = 0

    def _bump_revision():
        app.state.revision += 1

    engine.subscribe(_bump_revision)

    @app.get("/")
    def health():
        return {"status": "ok"}

    @app.get("/api/hints")
    def api_hints() -> List[HintRecord]:
        return engine.catalog.records

    @app.post("/api/search")
    def api_search(payload: SearchPayload):
        if is_blank_query(payload.message):
            return JSONResponse(status_code=400, content={"detail": "Enter the error message"})
        found = engine.search(payload.message)
        items = [engine.get_tree_item(element) for element in found]
        return {"query": payload.message, "revision": app.state.revision, "items": items}

    @app.get("/api/results")
    def api_results():
        return {
            "query": engine.query,
            "state": engine.state.value,
            "revision": app.state.revision,
            "items": _tree_items(engine),
        }

    @app.post("/api/reload")
    def api_reload():
        count = engine.reload()
        return {"detail": f"Reloaded {count} hints", "count": count}

    @app.exception_handler(CatalogError)
    async def handle_catalog_error(request: Request, exc: CatalogError):
        return JSONResponse(status_code=503, content={"detail": f"could not load hints: {exc}"})

    @app.exception_handler(Exception)
    async def handle_exceptions(request: Request, exc: Exception):
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    return app
