"""
Script to seed sample restaurants, products, admin accounts and banners.
Can be run via `python3 -m bin.init.seed_data`
"""

import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).resolve().parents[2]))

from entrega_shared.config import load_config
from entrega_shared.db import get_session, init_db, init_engine
from entrega_shared.models import Base
from entrega_shared.services.seed_service import load_seed_data

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main():
    try:
        logger.info("Initializing database connection...")
        config = load_config("seed_script")
        init_engine(config)
        init_db(Base.metadata)

        logger.info("Starting seed...")
        with get_session() as session:
            summary = load_seed_data(session)

        logger.info(f"Seed completed successfully: {summary}")

    except Exception as e:
        logger.error(f"Error seeding data: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
