import argparse
import logging

from restobill.config import settings
from restobill.db.engine import get_engine
from restobill.db.seed import init_db

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Create the restobill schema.")
    parser.add_argument("--rebuild", action="store_true", help="drop all tables first (destroys data)")
    parser.add_argument("--no-seed", action="store_true", help="skip the sample menu")
    args = parser.parse_args()

    engine = get_engine()
    init_db(engine, seed=settings.SEED_SAMPLE_ITEMS and not args.no_seed, rebuild=args.rebuild)
    logger.info("DB schema ready at %s", engine.url)

if __name__ == "__main__":
    main()
