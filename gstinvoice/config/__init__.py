"""Configuration package."""

# Re-export functions from parent config module
# Note: config.py is in gstinvoice/, not gstinvoice/config/, so we import from parent
import importlib.util
from pathlib import Path

# Import config module from parent directory; the package-qualified name
# keeps its relative imports (.config.profile_manager) working
config_path = Path(__file__).parent.parent / "config.py"
spec = importlib.util.spec_from_file_location("gstinvoice._config_module", config_path)
config_module = importlib.util.module_from_spec(spec)
spec.loader.exec_module(config_module)

# Re-export
DEFAULT_PAGE_SIZE = config_module.DEFAULT_PAGE_SIZE
get_app_name = config_module.get_app_name
get_app_version = config_module.get_app_version
get_default_output_dir = config_module.get_default_output_dir
get_output_subdirs = config_module.get_output_subdirs
get_profile_name = config_module.get_profile_name
get_page_size = config_module.get_page_size
get_validation_tolerance = config_module.get_validation_tolerance
get_include_paise_in_words = config_module.get_include_paise_in_words
get_currency_prefix = config_module.get_currency_prefix

__all__ = [
    'DEFAULT_PAGE_SIZE',
    'get_app_name',
    'get_app_version',
    'get_default_output_dir',
    'get_output_subdirs',
    'get_profile_name',
    'get_page_size',
    'get_validation_tolerance',
    'get_include_paise_in_words',
    'get_currency_prefix',
]
