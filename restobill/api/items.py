# restobill/api/items.py

from typing import List

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.engine import Engine

from restobill import catalog
from restobill.db.engine import get_engine
from restobill.errors import ReferenceNotFoundError
from restobill.models.items import Created, ItemIn, ItemOut, ItemStatusIn

router = APIRouter(prefix="/items", tags=["items"])


@router.get("/", response_model=List[ItemOut])
def list_items(
    include_inactive: bool = Query(False, description="Admin view: include hidden items"),
    engine: Engine = Depends(get_engine),
) -> List[ItemOut]:
    return catalog.list_items(engine, include_inactive=include_inactive)


@router.get("/{item_id}", response_model=ItemOut)
def get_item(item_id: int, engine: Engine = Depends(get_engine)) -> ItemOut:
    item = catalog.get_item(engine, item_id)
    if item is None:
        raise ReferenceNotFoundError("item", item_id)
    return item


@router.post("/", response_model=Created, status_code=201)
def add_item(item: ItemIn, engine: Engine = Depends(get_engine)) -> Created:
    return Created(id=catalog.add_item(engine, item))


@router.put("/{item_id}", status_code=204)
def update_item(item_id: int, item: ItemIn, engine: Engine = Depends(get_engine)) -> Response:
    catalog.update_item(engine, item_id, item)
    return Response(status_code=204)


@router.patch("/{item_id}/status", status_code=204)
def toggle_item_status(
    item_id: int,
    status: ItemStatusIn,
    engine: Engine = Depends(get_engine),
) -> Response:
    catalog.toggle_item_status(engine, item_id, status.is_active)
    return Response(status_code=204)


@router.delete("/{item_id}", status_code=204)
def delete_item(item_id: int, engine: Engine = Depends(get_engine)) -> Response:
    """
    Hard delete. Rejected with 409 while bill lines still reference the item;
    hide it through /items/{id}/status instead.
    """
    catalog.delete_item(engine, item_id)
    return Response(status_code=204)
