from app.config.interests_config import DEFAULT_INTERESTS
from app.scripts.seed_tags import seed_tags


def test_seed_tags_is_idempotent(supabase):
    assert seed_tags(supabase) == len(DEFAULT_INTERESTS)
    assert seed_tags(supabase) == len(DEFAULT_INTERESTS)

    assert sorted(t["name"] for t in supabase.rows("tags")) == sorted(DEFAULT_INTERESTS)
