"""
Configuration loader for clustering profiles and environment variables.
"""

import os
from dataclasses import fields
from pathlib import Path
from typing import Dict, Any, List, Optional
import yaml

from ..spatial.clustering import ClusteringConfig

PROFILE_ENV_VAR = "GEOCLUSTER_PROFILE"
DEFAULT_PROFILE = "default"


class ConfigLoader:
    """Load clustering profiles from YAML files and environment."""

    CONFIG_DIR = Path(__file__).parent.parent / "configs"

    @classmethod
    def available_profiles(cls) -> List[str]:
        return sorted(f.stem for f in cls.CONFIG_DIR.glob("*.yaml"))

    @classmethod
    def load_profile(cls, profile_name: str = DEFAULT_PROFILE) -> Dict[str, Any]:
        """
        Load a clustering profile.

        Args:
            profile_name: Name of the profile (default, dense-city, suburban, rural)

        Returns:
            Dictionary with configuration values

        Raises:
            FileNotFoundError: If profile doesn't exist
        """
        profile_path = cls.CONFIG_DIR / f"{profile_name}.yaml"

        if not profile_path.exists():
            raise FileNotFoundError(
                f"Profile '{profile_name}' not found. "
                f"Available profiles: {', '.join(cls.available_profiles())}"
            )

        with open(profile_path, "r") as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def get_profile_from_env(cls) -> Optional[str]:
        """Get profile name from GEOCLUSTER_PROFILE environment variable."""
        return os.getenv(PROFILE_ENV_VAR)

    @classmethod
    def load_default_or_env_profile(cls) -> Dict[str, Any]:
        """Load the profile named by the environment, or the default profile."""
        profile = cls.get_profile_from_env() or DEFAULT_PROFILE
        return cls.load_profile(profile)


def get_clustering_config(profile: Optional[str] = None) -> ClusteringConfig:
    """
    Build a ClusteringConfig from a profile.

    The profile is ``profile`` if given, else $GEOCLUSTER_PROFILE, else
    ``default``. Keys the profile does not set keep the dataclass defaults.
    """
    if profile is None:
        values = ConfigLoader.load_default_or_env_profile()
    else:
        values = ConfigLoader.load_profile(profile)

    known = {f.name for f in fields(ClusteringConfig)}
    return ClusteringConfig(**{k: v for k, v in values.items() if k in known})
