"""
Tagnet: Explorer API Server
===========================

Single-session HTTP adapter over one ExplorerEngine.

The drawing surface reads the current payload and reports node clicks;
the UI chrome (grouping selector, detail view, filter bar) posts the
actions it raises. Every action answers with the full new payload.

Endpoints:
- GET    /health
- GET    /api/v1/graph                 -> current payload
- POST   /api/v1/grouping              -> choose grouping
- POST   /api/v1/nodes/{node_id}/select -> node click
- POST   /api/v1/tags/{tag}/filter     -> tag button on the detail view
- DELETE /api/v1/filter                -> clear filter
- DELETE /api/v1/selection             -> close detail view
- GET    /api/v1/items/{item_id}       -> one item

Path parameters use the path converter: tag values (and so cluster ids)
may contain "/", e.g. the period "1914/1918".

Usage:
    uvicorn tagnet.api.server:app --reload
"""
import os
import logging
from contextlib import asynccontextmanager
from dataclasses import asdict, dataclass
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from ..contracts.base import GroupDimension, TagnetError
from ..engine import EngineResult, ExplorerEngine
from ..presentation import PresentationConfig, ViewMapper
from ..store import load_item_store

logger = logging.getLogger(__name__)


# =============================================================================
# INFRASTRUCTURE SETUP
# =============================================================================

@dataclass(frozen=True)
class ServerConfig:
    """Server settings, read from the environment."""
    data_path: str
    strict: bool = True

    @staticmethod
    def from_env() -> "ServerConfig":
        return ServerConfig(
            data_path=os.environ.get(
                "TAGNET_DATA_PATH", os.path.join(os.getcwd(), "data", "images.json")
            ),
            strict=os.environ.get("TAGNET_STRICT", "1") != "0",
        )


class GroupingRequest(BaseModel):
    group_type: Optional[str] = None


def create_app(
    engine: Optional[ExplorerEngine] = None,
    presentation: Optional[PresentationConfig] = None
) -> FastAPI:
    """
    Build the API app.

    With no engine given, the lifespan loads the item store from
    TAGNET_DATA_PATH. A load failure aborts startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "engine", None) is None:
            config = ServerConfig.from_env()
            logger.info("Loading items from %s", config.data_path)
            try:
                store = load_item_store(config.data_path, strict=config.strict)
            except TagnetError:
                logger.exception("Failed to load item store")
                raise
            app.state.engine = ExplorerEngine(store)
            logger.info("Engine initialized with %d items", len(store))

        yield

        logger.info("Shutting down explorer engine")
        app.state.engine = None

    app = FastAPI(
        title="Tagnet Explorer API",
        version="0.1.0",
        description="Tag-linked item network: grouping, filtering and inspection",
        lifespan=lifespan
    )
    app.state.engine = engine
    app.state.mapper = ViewMapper(presentation)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
    )

    _register_routes(app)
    return app


def _get_engine(request: Request) -> ExplorerEngine:
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise HTTPException(status_code=503, detail="Engine not initialized")
    return engine


def _payload(request: Request, engine: ExplorerEngine, result: Optional[EngineResult] = None) -> dict:
    mapper: ViewMapper = request.app.state.mapper
    if result is None:
        view = mapper.map_snapshot(engine.snapshot(), engine.state, engine.selected_item())
    else:
        view = mapper.map_snapshot(result.snapshot, result.state, result.detail_item)
    payload = mapper.to_payload(view)
    payload["metrics"] = asdict(engine.compute_metrics())
    return payload


# =============================================================================
# ENDPOINTS
# =============================================================================

def _register_routes(app: FastAPI):

    @app.get("/health")
    async def health_check(request: Request):
        """System status."""
        engine = _get_engine(request)
        return {"status": "online", "items": len(engine.store)}

    @app.get("/api/v1/graph")
    async def get_graph(request: Request):
        """Current node/edge payload with state and open detail view."""
        engine = _get_engine(request)
        return _payload(request, engine)

    @app.post("/api/v1/grouping")
    async def choose_grouping(body: GroupingRequest, request: Request):
        """Choose a grouping dimension, or none. Always clears the filter."""
        engine = _get_engine(request)
        try:
            group_type = GroupDimension.parse(body.group_type)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return _payload(request, engine, engine.choose_grouping(group_type))

    @app.post("/api/v1/nodes/{node_id:path}/select")
    async def select_node(node_id: str, request: Request):
        """
        Node click from the drawing surface.
        Unknown or undecodable ids leave the state unchanged.
        """
        engine = _get_engine(request)
        return _payload(request, engine, engine.select_node(node_id))

    @app.post("/api/v1/tags/{tag:path}/filter")
    async def filter_by_tag(tag: str, request: Request):
        """Tag button on the detail view: filter by it and close the view."""
        engine = _get_engine(request)
        return _payload(request, engine, engine.click_tag(tag))

    @app.delete("/api/v1/filter")
    async def clear_filter(request: Request):
        engine = _get_engine(request)
        return _payload(request, engine, engine.clear_filter())

    @app.delete("/api/v1/selection")
    async def close_detail(request: Request):
        engine = _get_engine(request)
        return _payload(request, engine, engine.close_detail())

    @app.get("/api/v1/items/{item_id:path}")
    async def get_item(item_id: str, request: Request):
        engine = _get_engine(request)
        item = engine.store.get(item_id)
        if item is None:
            raise HTTPException(status_code=404, detail=f"Unknown item: {item_id}")
        return item.to_dict()


app = create_app()
