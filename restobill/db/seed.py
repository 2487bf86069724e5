# restobill/db/seed.py

import logging
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.engine import Engine

from restobill.db.schema import items, metadata

logger = logging.getLogger(__name__)

# (local name, common name, price, category)
SAMPLE_ITEMS = [
    ("தோசை", "Dosa", Decimal("40"), "Breakfast"),
    ("இட்லி", "Idly", Decimal("30"), "Breakfast"),
    ("வடை", "Vada", Decimal("20"), "Breakfast"),
    ("பூரி", "Poori", Decimal("35"), "Breakfast"),
    ("சப்பாத்தி", "Chapathi", Decimal("35"), "Breakfast"),
    ("பொங்கல்", "Pongal", Decimal("45"), "Breakfast"),
    ("உப்புமா", "Upma", Decimal("30"), "Breakfast"),
    ("பரோட்டா", "Parotta", Decimal("15"), "Dinner"),
    ("சாதம்", "Rice", Decimal("50"), "Lunch"),
    ("சாம்பார்", "Sambar", Decimal("20"), "Lunch"),
    ("ரசம்", "Rasam", Decimal("15"), "Lunch"),
    ("தயிர்", "Curd", Decimal("20"), "Lunch"),
]


def seed_sample_items(engine: Engine) -> int:
    """
    Insert the sample menu if the catalog is empty. Returns rows inserted.
    """
    with engine.begin() as conn:
        count = conn.execute(select(func.count()).select_from(items)).scalar_one()
        if count:
            return 0

        conn.execute(
            items.insert(),
            [
                {
                    "name_local": local,
                    "name_common": common,
                    "price": price,
                    "category": category,
                    "is_active": True,
                }
                for local, common, price, category in SAMPLE_ITEMS
            ],
        )

    logger.info("Seeded %s sample menu items", len(SAMPLE_ITEMS))
    return len(SAMPLE_ITEMS)


def init_db(engine: Engine, seed: bool = True, rebuild: bool = False) -> None:
    """Create tables (dropping them first when `rebuild`) and optionally seed."""
    if rebuild:
        metadata.drop_all(engine)
    metadata.create_all(engine)
    if seed:
        seed_sample_items(engine)
