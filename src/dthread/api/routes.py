"""API routes. Each handler calls one service and maps its ServiceResult."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from dthread.api.schemas import (
    BulkGenerate,
    ConfigUpdate,
    ConfigView,
    ItemCreate,
    NestRequest,
    RelationshipCreate,
)
from dthread.infrastructure.store import EntityStore
from dthread.services.config import ConfigService
from dthread.services.items import ItemService
from dthread.services.layout import LayoutService
from dthread.services.relationships import RelationshipGatekeeper
from dthread.services.result import ServiceResult

router = APIRouter()

# error code -> HTTP status
STATUS_BY_CODE: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "UNKNOWN_DOMAIN": 400,
    "POLICY_VIOLATION": 400,
    "NOT_FOUND": 404,
    "ID_COLLISION": 409,
    "CYCLE_DETECTED": 422,
}


def get_store(request: Request) -> EntityStore:
    return request.app.state.store


StoreDep = Annotated[EntityStore, Depends(get_store)]


def respond(result: ServiceResult, *, status_code: int = 200) -> JSONResponse:
    """Success -> *status_code*; failure -> the status mapped from its error code."""
    if not result.ok:
        status_code = STATUS_BY_CODE.get(result.error_code or "", 500)
    return JSONResponse(result.payload(), status_code=status_code)


def respond_config(result: ServiceResult) -> JSONResponse:
    """Config results go out camelCased, matching the request body."""
    if not result.ok:
        return respond(result)
    view = ConfigView.model_validate(result.data)
    return JSONResponse(view.model_dump(by_alias=True))


# ── Config ────────────────────────────────────────────────────────────


@router.get("/config")
def get_config(store: StoreDep) -> JSONResponse:
    return respond_config(ConfigService(store).get())


@router.put("/config")
def update_config(body: ConfigUpdate, store: StoreDep) -> JSONResponse:
    return respond_config(
        ConfigService(store).update(
            domain_order=body.domain_order,
            allow_only_adjacent_connections=body.allow_only_adjacent_connections,
        )
    )


# ── Items ─────────────────────────────────────────────────────────────


@router.get("/items/{domain}")
def list_items(domain: str, store: StoreDep) -> JSONResponse:
    return respond(ItemService(store).list_items(domain))


@router.post("/items/{domain}")
def create_item(domain: str, body: ItemCreate, store: StoreDep) -> JSONResponse:
    result = ItemService(store).create_item(
        domain,
        body.title or "",
        description=body.description,
        parent_id=body.parent_id,
        unit=body.unit,
        value_type=body.value_type,
        function_type=body.function_type,
    )
    return respond(result, status_code=201)


@router.post("/items/{domain}/bulk-generate")
def bulk_generate(domain: str, body: BulkGenerate, store: StoreDep) -> JSONResponse:
    defaults = store.settings.generate
    result = ItemService(store).bulk_generate(
        domain,
        count=defaults.default_count if body.count is None else body.count,
        min_subs=defaults.min_subs if body.min_subs is None else body.min_subs,
        max_subs=defaults.max_subs if body.max_subs is None else body.max_subs,
        seed=body.seed,
    )
    return respond(result, status_code=201)


@router.post("/items/{domain}/{parent_id}/children")
def nest_item(domain: str, parent_id: str, body: NestRequest, store: StoreDep) -> JSONResponse:
    return respond(ItemService(store).nest(domain, parent_id, body.child_id or ""))


# ── Relationships ─────────────────────────────────────────────────────


@router.post("/relationships")
def create_relationship(body: RelationshipCreate, store: StoreDep) -> JSONResponse:
    result = RelationshipGatekeeper(store).create_relationship(
        body.from_id or "",
        body.to_id or "",
        body.from_domain or "",
        body.to_domain or "",
        body.relationship_type or "",
    )
    return respond(result, status_code=201)


# ── Layout ────────────────────────────────────────────────────────────


@router.get("/layout")
def get_layout(store: StoreDep, mode: str | None = Query(default=None)) -> JSONResponse:
    return respond(LayoutService(store).compute(mode))
