import argparse
import asyncio
import os
import sys

# Add the project root to sys.path so we can import holiday_api
sys.path.append(os.getcwd())

from holiday_api.config import DB_NAME, LOG_LEVEL, STATIC_HOLIDAYS_FILE
from holiday_api.db import client, get_holiday_store
from holiday_api.services.holidays import HolidayService
from holiday_api.services.seed import load_static_seeds
from holiday_api.utils.logging_config import setup_logging


async def import_static(year=None):
    """Import the configured static holidays into the holidays collection."""
    try:
        seeds = load_static_seeds(STATIC_HOLIDAYS_FILE)
        print(f"🔄 Importing {len(seeds)} static holidays from {STATIC_HOLIDAYS_FILE} into {DB_NAME}...")

        service = HolidayService(get_holiday_store())
        summary = await service.import_static(seeds, year)

        for result in summary.results:
            marker = "✅" if result.status == "added" else "⚠️ "
            print(f"   {marker} {result.name}: {result.status} ({result.id})")

        print(f"\n🎉 Done. Added {summary.total_added}, skipped {summary.total_skipped}.")
    except Exception as e:
        print(f"❌ Error importing static holidays: {str(e)}")
        raise
    finally:
        client.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Import static holidays")
    parser.add_argument("--year", type=int, default=None, help="Year for the template dates (default: current year)")
    args = parser.parse_args()
    setup_logging(level=LOG_LEVEL, log_to_file=False)

    if sys.platform == "win32":
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
    asyncio.run(import_static(args.year))
