from supabase import create_client, Client

from max_tracking.config import get_settings


def get_supabase() -> Client:
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_key:
        raise RuntimeError("Supabase credentials missing from .env")
    return create_client(settings.supabase_url, settings.supabase_key)
