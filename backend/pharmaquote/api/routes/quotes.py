"""Draft quote API routes.

Item operations mirror the collection semantics: an out-of-range index, or a
removal at the minimum item count, leaves the draft unchanged and still returns
200 with the current state.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, BackgroundTasks
from pydantic import BaseModel, Field

from ...api.dependencies import (
    CollectionConfigDep,
    SettingsSourceDep,
    StoreDep,
    TotalsAggregatorDep,
)
from ...models import APIResponse, Item, QuoteForm
from ...services.quote_session import QuoteFormSession
from ...utils import log_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Quotes"])


class CreateQuoteRequest(BaseModel):
    """Optional starting point for a new draft."""

    fields: Dict[str, Any] = Field(default_factory=dict, description="Header field -> value")
    items: Optional[List[Item]] = Field(None, description="Starting line items")


class ItemFieldUpdate(BaseModel):
    """One field edit of a line item."""

    field: str = Field(..., description="Item field, e.g. formulationType")
    value: Any = Field(None, description="New value")


def _session_response(session: QuoteFormSession, message: str, **extra: Any) -> dict:
    data = session.snapshot()
    data.update(extra)
    return {"success": True, "message": message, "data": data}


@router.post(
    "/quotes",
    response_model=APIResponse,
    status_code=201,
    summary="Open a draft quote",
)
async def create_quote(
    store: StoreDep,
    settings_source: SettingsSourceDep,
    collection_config: CollectionConfigDep,
    background_tasks: BackgroundTasks,
    body: Optional[CreateQuoteRequest] = None,
) -> dict:
    """
    Open a draft quote with process defaults.

    Organization settings (terms, bank details) are fetched in the background
    and patched in when they arrive; the draft is usable immediately.
    """
    try:
        body = body or CreateQuoteRequest()
        form = QuoteForm(items=body.items) if body.items is not None else QuoteForm()
        session = QuoteFormSession(form=form, collection_config=collection_config)
        ignored = session.set_fields(body.fields)

        store.add(session)
        background_tasks.add_task(session.load_settings, settings_source)

        return _session_response(session, "Draft quote created", ignoredFields=ignored)

    except Exception as e:
        log_error(e, context="Create quote")
        raise


@router.get(
    "/quotes/{quote_id}",
    response_model=APIResponse,
    summary="Get a draft quote",
)
async def get_quote(quote_id: str, store: StoreDep) -> dict:
    try:
        session = store.get(quote_id)
        return _session_response(session, "Draft quote")

    except Exception as e:
        log_error(e, context=f"Get quote: {quote_id}")
        raise


@router.patch(
    "/quotes/{quote_id}",
    response_model=APIResponse,
    summary="Update header fields",
)
async def update_quote(quote_id: str, fields: Dict[str, Any], store: StoreDep) -> dict:
    """
    Set party, contact, charges and free-text fields.

    Unknown field names are reported in `ignoredFields` and otherwise ignored.
    """
    try:
        session = store.get(quote_id)
        ignored = session.set_fields(fields)
        return _session_response(session, "Quote updated", ignoredFields=ignored)

    except Exception as e:
        log_error(e, context=f"Update quote: {quote_id}")
        raise


@router.delete(
    "/quotes/{quote_id}",
    response_model=APIResponse,
    summary="Close a draft quote",
)
async def delete_quote(quote_id: str, store: StoreDep) -> dict:
    try:
        store.remove(quote_id)
        return {"success": True, "message": "Draft quote closed", "data": {"id": quote_id}}

    except Exception as e:
        log_error(e, context=f"Delete quote: {quote_id}")
        raise


# ===== Items =====


@router.post(
    "/quotes/{quote_id}/items",
    response_model=APIResponse,
    summary="Add a line item",
)
async def add_item(quote_id: str, store: StoreDep) -> dict:
    try:
        session = store.get(quote_id)
        session.items.add()
        return _session_response(session, "Item added")

    except Exception as e:
        log_error(e, context=f"Add item: {quote_id}")
        raise


@router.post(
    "/quotes/{quote_id}/items/{index}/duplicate",
    response_model=APIResponse,
    summary="Duplicate a line item",
)
async def duplicate_item(quote_id: str, index: int, store: StoreDep) -> dict:
    """The copy is appended at the end of the item list."""
    try:
        session = store.get(quote_id)
        session.items.duplicate(index)
        return _session_response(session, "Item duplicated")

    except Exception as e:
        log_error(e, context=f"Duplicate item {index}: {quote_id}")
        raise


@router.delete(
    "/quotes/{quote_id}/items/{index}",
    response_model=APIResponse,
    summary="Remove a line item",
)
async def remove_item(quote_id: str, index: int, store: StoreDep) -> dict:
    """Removing the last remaining item is ignored."""
    try:
        session = store.get(quote_id)
        session.items.remove(index)
        return _session_response(session, "Item removed")

    except Exception as e:
        log_error(e, context=f"Remove item {index}: {quote_id}")
        raise


@router.patch(
    "/quotes/{quote_id}/items/{index}",
    response_model=APIResponse,
    summary="Update one field of a line item",
)
async def update_item(
    quote_id: str,
    index: int,
    update: ItemFieldUpdate,
    store: StoreDep,
) -> dict:
    """
    Set one item field; dependent fields are reset as needed.

    - Changing `formulationType` clears packing and packaging type
    - Choosing a packaging type other than `Blister` clears the PVC type
    """
    try:
        session = store.get(quote_id)
        session.items.update(index, update.field, update.value)
        return _session_response(session, "Item updated")

    except Exception as e:
        log_error(e, context=f"Update item {index}: {quote_id}")
        raise


@router.put(
    "/quotes/{quote_id}/items/{index}",
    response_model=APIResponse,
    summary="Replace a line item",
)
async def replace_item(quote_id: str, index: int, item: Item, store: StoreDep) -> dict:
    """Install an already validated item verbatim."""
    try:
        session = store.get(quote_id)
        session.items.replace(index, item)
        return _session_response(session, "Item replaced")

    except Exception as e:
        log_error(e, context=f"Replace item {index}: {quote_id}")
        raise


# ===== Submission =====


@router.post(
    "/quotes/{quote_id}/validate",
    response_model=APIResponse,
    summary="Validate a draft quote",
)
async def validate_quote(quote_id: str, store: StoreDep) -> dict:
    """
    Run the form validation.

    The request succeeds either way; `data.valid` and `data.errors` carry the
    outcome, `data.itemErrors` the per-item field messages.
    """
    try:
        session = store.get(quote_id)
        result = session.validate()
        message = "Quote is valid" if result.valid else "Quote has validation errors"
        return {"success": True, "message": message, "data": result.model_dump(by_alias=True)}

    except Exception as e:
        log_error(e, context=f"Validate quote: {quote_id}")
        raise


@router.get(
    "/quotes/{quote_id}/preview",
    response_model=APIResponse,
    summary="Rendering input for a draft quote",
)
async def preview_quote(
    quote_id: str,
    store: StoreDep,
    aggregator: TotalsAggregatorDep,
) -> dict:
    try:
        session = store.get(quote_id)
        context = session.render_context(aggregator)
        return {
            "success": True,
            "message": "Quote preview",
            "data": context.model_dump(by_alias=True),
        }

    except Exception as e:
        log_error(e, context=f"Preview quote: {quote_id}")
        raise
