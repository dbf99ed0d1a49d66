"""Global profile manager for invoice configuration."""

import logging
from typing import Optional

from . import get_profile_name
from .profile_loader import ProfileConfig, load_profile, get_default_profile

logger = logging.getLogger(__name__)

# Global profile instance
_current_profile: Optional[ProfileConfig] = None


def set_profile(profile_name: str = "default") -> ProfileConfig:
    """Set the active profile.

    Args:
        profile_name: Name of profile to load

    Returns:
        Loaded ProfileConfig

    Raises:
        FileNotFoundError: If profile doesn't exist
        ValueError: If profile is invalid
    """
    global _current_profile
    _current_profile = load_profile(profile_name)
    return _current_profile


def get_profile() -> ProfileConfig:
    """Get the current active profile.

    Returns:
        Current ProfileConfig (GSTINVOICE_PROFILE, or default if none set)
    """
    global _current_profile
    if _current_profile is None:
        profile_name = get_profile_name()
        try:
            _current_profile = load_profile(profile_name)
        except FileNotFoundError:
            logger.warning(f"Profile '{profile_name}' not found, using default profile")
            _current_profile = get_default_profile()
    return _current_profile


def reset_profile():
    """Reset to default profile."""
    global _current_profile
    _current_profile = None
