# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Supabase client singleton, ping and startup retry
# - passwords.py: bcrypt password hashing via passlib
# - utils.py: Shared utilities (UUID normalization, UTC timestamps)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.passwords import PasswordHasher
from lib.utils import normalize_uuid, utc_now, utc_now_iso

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Passwords
    "PasswordHasher",
    # Utils
    "normalize_uuid",
    "utc_now",
    "utc_now_iso",
]
