"""Core constants: cache key prefixes, role names and shared literal values.

Single source of truth for cache key structure (DRY). Used by
infrastructure cache and the user cache-aside layer.
"""

# Cache key prefixes (used as <prefix><sep><id>)
CACHE_PREFIX_USER = "user"

# Delimiter for composite keys
CACHE_KEY_SEP = "-"

# Activation link path on the frontend (<frontend_url>/confirm/<token>)
ACTIVATION_PATH = "/confirm"

# Roles. A higher level grants everything a lower level does.
ROLE_USER = "user"
ROLE_MODERATOR = "moderator"
ROLE_ADMIN = "admin"

# (name, level, description) seeded by migration b4d6f8a0c2e1.
DEFAULT_ROLES: tuple[tuple[str, int, str], ...] = (
    (ROLE_USER, 1, "A user can create posts and comments"),
    (ROLE_MODERATOR, 2, "A moderator can update other users' posts"),
    (ROLE_ADMIN, 3, "An admin can update and delete other users' posts"),
)
