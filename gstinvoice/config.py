"""Central configuration for the GST invoice engine."""

import os
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 18


def get_app_name() -> str:
    """Get application name."""
    return "GST Invoice Engine"


def get_app_version() -> str:
    """Get application version from pyproject.toml."""
    try:
        import tomli
        pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            pyproject = tomli.load(f)
            return pyproject.get("project", {}).get("version", "0.1.0")
    except Exception:
        # Fallback version if pyproject.toml cannot be read
        return "0.1.0"


def get_default_output_dir() -> Path:
    """Get default output directory.

    GSTINVOICE_OUTPUT_DIR wins when set; otherwise project root / "out".

    Returns:
        Path object to default output directory (created if needed)
    """
    env_dir = os.getenv("GSTINVOICE_OUTPUT_DIR")
    if env_dir:
        output_dir = Path(env_dir)
    else:
        output_dir = Path(__file__).resolve().parent.parent / "out"
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def get_output_subdirs(base_output_dir: Path) -> dict:
    """Get output subdirectory structure.

    Args:
        base_output_dir: Base output directory path

    Returns:
        Dict with keys: 'json', 'excel'
    """
    subdirs = {
        'json': base_output_dir / 'json',
        'excel': base_output_dir / 'excel',
    }

    for subdir in subdirs.values():
        subdir.mkdir(parents=True, exist_ok=True)

    return subdirs


def get_profile_name() -> str:
    """Get configuration profile name.

    Returns:
        GSTINVOICE_PROFILE environment variable, default "default"
    """
    return os.getenv('GSTINVOICE_PROFILE', 'default')


def get_page_size(override: Optional[int] = None) -> int:
    """Get number of item rows per printed page.

    Priority: explicit override -> GSTINVOICE_PAGE_SIZE -> active profile
    -> DEFAULT_PAGE_SIZE. Invalid values are logged and skipped.
    """
    if override is not None:
        return override

    env_value = os.getenv('GSTINVOICE_PAGE_SIZE')
    if env_value:
        try:
            size = int(env_value)
            if size >= 1:
                return size
            logger.warning(f"Invalid GSTINVOICE_PAGE_SIZE '{env_value}', ignoring")
        except ValueError:
            logger.warning(f"Invalid GSTINVOICE_PAGE_SIZE '{env_value}', ignoring")

    try:
        from .config.profile_manager import get_profile
        size = int(get_profile().page_size)
        if size >= 1:
            return size
        logger.warning(f"Invalid page_size {size} in profile, using {DEFAULT_PAGE_SIZE}")
    except Exception as e:
        logger.warning(f"Failed to get page_size from profile: {e}, using {DEFAULT_PAGE_SIZE}")
    return DEFAULT_PAGE_SIZE


def get_validation_tolerance() -> float:
    """Get tolerance (rupees) used when validating totals.

    Returns:
        Profile tolerances['validation'], default 0.01
    """
    try:
        from .config.profile_manager import get_profile
        return float(get_profile().tolerances.get('validation', 0.01))
    except Exception as e:
        logger.warning(f"Failed to get validation tolerance from profile: {e}, using 0.01")
        return 0.01


def get_currency_prefix() -> str:
    """Get the currency label printed before formatted amounts."""
    try:
        from .config.profile_manager import get_profile
        return str(get_profile().labels.get('currency_prefix', 'Rs. '))
    except Exception as e:
        logger.warning(f"Failed to get labels from profile: {e}")
        return 'Rs. '


def get_include_paise_in_words() -> bool:
    """Whether the words footer spells out paise instead of dropping them."""
    try:
        from .config.profile_manager import get_profile
        return bool(get_profile().words.get('include_paise', False))
    except Exception as e:
        logger.warning(f"Failed to get words settings from profile: {e}")
        return False
