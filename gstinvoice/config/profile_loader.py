"""Profile loader for configurable invoice rendering behavior."""

import yaml
from pathlib import Path
from typing import Dict, Any
from dataclasses import dataclass, field

DEFAULT_PROFILE_PAGE_SIZE = 18


@dataclass
class ProfileConfig:
    """Configuration profile for invoice computation and export."""
    name: str
    description: str = ""
    page_size: int = DEFAULT_PROFILE_PAGE_SIZE  # item rows per printed page
    tolerances: Dict[str, float] = field(default_factory=dict)
    words: Dict[str, Any] = field(default_factory=dict)
    labels: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.page_size, int) or self.page_size < 1:
            raise ValueError(f"page_size must be a positive integer, got {self.page_size!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProfileConfig':
        """Create ProfileConfig from dictionary."""
        return cls(
            name=data.get('name', 'default'),
            description=data.get('description', ''),
            page_size=data.get('page_size', DEFAULT_PROFILE_PAGE_SIZE),
            tolerances=data.get('tolerances', {}),
            words=data.get('words', {}),
            labels=data.get('labels', {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'name': self.name,
            'description': self.description,
            'page_size': self.page_size,
            'tolerances': self.tolerances,
            'words': self.words,
            'labels': self.labels,
        }


def get_profiles_dir() -> Path:
    """Get directory containing profile YAML files.

    Returns:
        Path to profiles directory
    """
    # Look for profiles in configs/profiles relative to project root
    current_file = Path(__file__).resolve()
    # gstinvoice/config/profile_loader.py -> gstinvoice/config -> gstinvoice -> root
    project_root = current_file.parent.parent.parent
    profiles_dir = project_root / "configs" / "profiles"
    return profiles_dir


def load_profile(profile_name: str = "default") -> ProfileConfig:
    """Load a configuration profile.

    Args:
        profile_name: Name of profile to load (without .yaml extension)

    Returns:
        ProfileConfig object

    Raises:
        FileNotFoundError: If profile file doesn't exist
        ValueError: If profile file is invalid
    """
    profiles_dir = get_profiles_dir()
    profile_path = profiles_dir / f"{profile_name}.yaml"

    if not profile_path.exists():
        raise FileNotFoundError(f"Profile not found: {profile_name} (expected at {profile_path})")

    try:
        with open(profile_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        if not data:
            raise ValueError(f"Profile file is empty: {profile_path}")

        return ProfileConfig.from_dict(data)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in profile {profile_name}: {e}")
    except Exception as e:
        raise ValueError(f"Error loading profile {profile_name}: {e}")


def list_available_profiles() -> list[str]:
    """List all available profile names.

    Returns:
        List of profile names (without .yaml extension)
    """
    profiles_dir = get_profiles_dir()

    if not profiles_dir.exists():
        return ["default"]

    profiles = []
    for profile_file in profiles_dir.glob("*.yaml"):
        profiles.append(profile_file.stem)

    return sorted(profiles) if profiles else ["default"]


def get_default_profile() -> ProfileConfig:
    """Get default profile (always available).

    Returns:
        Default ProfileConfig
    """
    try:
        return load_profile("default")
    except FileNotFoundError:
        # Fallback: return minimal default config
        return ProfileConfig(
            name="default",
            description="Default configuration",
            page_size=DEFAULT_PROFILE_PAGE_SIZE,
            tolerances={"validation": 0.01},
            words={"include_paise": False},
        )
