"""
Seed Tags Script
This script populates the tags table with the default interests.
Safe to re-run: existing tags are reused, not duplicated.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from app.config.interests_config import DEFAULT_INTERESTS
from app.database.supabase_client import get_supabase
from app.modules.tags.service import TagService
from supabase import Client
from typing import List
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def seed_tags(supabase: Client, names: List[str] = DEFAULT_INTERESTS) -> int:
    """Make sure every default interest exists as a tag"""
    logger.info("Seeding tags...")
    tags = TagService(supabase).get_or_create_tags(names)
    logger.info(f"Tags: {len(tags)} present")
    return len(tags)


def main():
    """Main function to seed tags"""
    try:
        supabase = get_supabase()
        count = seed_tags(supabase)
        logger.info(f"Seeding completed successfully! {count} tags processed")
    except Exception as e:
        logger.error(f"Error during seeding: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
