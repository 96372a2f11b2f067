"""
Journal-map profiles: the clustering radius table and locale default regions.

A profile is a YAML file under ``journalmap/configs/``. The active one is
named by the JOURNAL_MAP_PROFILE environment variable, ``default`` otherwise.
"""

import os
from pathlib import Path
from typing import Dict, Any, Optional
import yaml

from ..spatial.clustering import ClusterRadiusPolicy, DEFAULT_RADIUS_POLICY


DEFAULT_PROFILE = "default"
PROFILE_ENV_VAR = "JOURNAL_MAP_PROFILE"


class ConfigLoader:
    """Locate and parse journal-map profiles."""

    CONFIG_DIR = Path(__file__).parent.parent / "configs"

    @classmethod
    def load_profile(cls, profile_name: str = DEFAULT_PROFILE) -> Dict[str, Any]:
        """
        Parse one profile.

        Args:
            profile_name: File stem under CONFIG_DIR, e.g. "default"

        Returns:
            Mapping with the optional ``cluster_radius`` and
            ``default_regions`` sections; empty for an empty file

        Raises:
            FileNotFoundError: If no such profile exists; the message lists
                the profiles that do
        """
        profile_path = cls.CONFIG_DIR / f"{profile_name}.yaml"

        if not profile_path.exists():
            available = sorted(f.stem for f in cls.CONFIG_DIR.glob("*.yaml"))
            raise FileNotFoundError(
                f"Profile '{profile_name}' not found. Available profiles: {', '.join(available)}"
            )

        with open(profile_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def get_profile_from_env(cls) -> Optional[str]:
        """Profile named by JOURNAL_MAP_PROFILE, or None when unset."""
        return os.getenv(PROFILE_ENV_VAR)

    @classmethod
    def load_default_or_env_profile(cls) -> Dict[str, Any]:
        """Parse the active profile (environment first, then ``default``)."""
        profile = cls.get_profile_from_env() or DEFAULT_PROFILE
        return cls.load_profile(profile)


def get_config() -> Dict[str, Any]:
    """Active profile; read from disk on every call."""
    return ConfigLoader.load_default_or_env_profile()


def load_radius_policy(config: Optional[Dict[str, Any]] = None) -> ClusterRadiusPolicy:
    """
    Radius policy from the ``cluster_radius`` section of a profile.

    Falls back to DEFAULT_RADIUS_POLICY when the profile has no such section.

    Raises:
        ValueError: If the section is present but malformed
    """
    if config is None:
        config = get_config()
    section = config.get("cluster_radius")
    if not section:
        return DEFAULT_RADIUS_POLICY
    return ClusterRadiusPolicy.from_config(section)
