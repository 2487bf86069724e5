# restobill/catalog.py

"""
Catalog store: menu items with bilingual names.

Items referenced by bill lines cannot be hard-deleted (the foreign key on
bill_items.item_id rejects it); hide them with toggle_item_status instead.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.engine import Engine

from restobill.config import settings
from restobill.db.engine import read_connection, write_transaction
from restobill.db.schema import items
from restobill.errors import ReferenceNotFoundError, ValidationError
from restobill.models.items import ItemIn, ItemOut
from restobill.money import parse_money

logger = logging.getLogger(__name__)


def _row_to_item(row) -> ItemOut:
    return ItemOut(
        id=row["id"],
        name_local=row["name_local"],
        name_common=row["name_common"],
        price=row["price"],
        category=row["category"],
        image_ref=row["image_ref"],
        is_active=bool(row["is_active"]),
    )


def _clean_item(item: ItemIn) -> dict:
    name_local = (item.name_local or "").strip()
    name_common = (item.name_common or "").strip()
    if not name_local or not name_common:
        raise ValidationError("item needs both a local and a common name")
    price = parse_money(item.price, "item price")

    category = (item.category or "").strip() or settings.DEFAULT_CATEGORY
    return {
        "name_local": name_local,
        "name_common": name_common,
        "price": price,
        "category": category,
        "image_ref": item.image_ref or None,
    }


def list_items(engine: Engine, include_inactive: bool = False) -> List[ItemOut]:
    """
    Menu items ordered by common name. Only active items unless
    `include_inactive` (the admin view).
    """
    stmt = select(items).order_by(items.c.name_common)
    if not include_inactive:
        stmt = stmt.where(items.c.is_active.is_(True))

    with read_connection(engine, "list items") as conn:
        rows = conn.execute(stmt).mappings().all()

    return [_row_to_item(row) for row in rows]


def get_item(engine: Engine, item_id: int) -> Optional[ItemOut]:
    with read_connection(engine, "get item") as conn:
        row = conn.execute(select(items).where(items.c.id == item_id)).mappings().first()

    return _row_to_item(row) if row is not None else None


def add_item(engine: Engine, item: ItemIn) -> int:
    values = _clean_item(item)

    with write_transaction(engine, "add item") as conn:
        result = conn.execute(items.insert().values(is_active=True, **values))
        item_id = result.inserted_primary_key[0]

    logger.info("Added item %s (%s)", item_id, values["name_common"])
    return item_id


def update_item(engine: Engine, item_id: int, item: ItemIn) -> None:
    """Edit an item. Historical bill lines keep the rate they were sold at."""
    values = _clean_item(item)

    with write_transaction(engine, "update item") as conn:
        result = conn.execute(items.update().where(items.c.id == item_id).values(**values))
        if result.rowcount == 0:
            raise ReferenceNotFoundError("item", item_id)

    logger.info("Updated item %s", item_id)


def toggle_item_status(engine: Engine, item_id: int, is_active: bool) -> None:
    with write_transaction(engine, "toggle item status") as conn:
        result = conn.execute(
            items.update().where(items.c.id == item_id).values(is_active=bool(is_active))
        )
        if result.rowcount == 0:
            raise ReferenceNotFoundError("item", item_id)

    logger.info("Item %s is now %s", item_id, "active" if is_active else "inactive")


def delete_item(engine: Engine, item_id: int) -> None:
    with write_transaction(engine, "delete item") as conn:
        result = conn.execute(items.delete().where(items.c.id == item_id))
        if result.rowcount == 0:
            raise ReferenceNotFoundError("item", item_id)

    logger.info("Deleted item %s", item_id)
