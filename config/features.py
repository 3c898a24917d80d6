"""
Feature Flags - Easy on/off toggle for features.
Change values here to enable/disable functionality.
"""

import os


class Features:
    """Feature toggles - set via env vars or defaults"""

    # === CACHE WRITE-THROUGH ===
    # Mirror successful remote updates/deletes into the local collection cache.
    # Off reproduces the old behaviour where only creates were mirrored.
    MIRROR_WRITES_TO_CACHE: bool = os.getenv("MIRROR_WRITES_TO_CACHE", "true").lower() == "true"

    # === OFFLINE DEFAULTS ===
    SEED_DEFAULTS_ENABLED: bool = os.getenv("SEED_DEFAULTS_ENABLED", "true").lower() == "true"

    # === AUTH ===
    AUTO_CONFIRM_EMAIL: bool = os.getenv("AUTO_CONFIRM_EMAIL", "true").lower() == "true"
    MAX_SIGN_IN_ATTEMPTS: int = int(os.getenv("MAX_SIGN_IN_ATTEMPTS", "2"))

    # === DEBUG ===
    DEBUG_MODE: bool = os.getenv("DEBUG", "false").lower() == "true"

    @classmethod
    def to_dict(cls) -> dict:
        """Get all features as dict (useful for logging)"""
        return {
            "mirror_writes_to_cache": cls.MIRROR_WRITES_TO_CACHE,
            "seed_defaults_enabled": cls.SEED_DEFAULTS_ENABLED,
            "auto_confirm_email": cls.AUTO_CONFIRM_EMAIL,
            "max_sign_in_attempts": cls.MAX_SIGN_IN_ATTEMPTS,
            "debug_mode": cls.DEBUG_MODE,
        }


# Shortcut
features = Features()
