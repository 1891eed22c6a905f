"""
Configuration loader for clustering profiles and environment variables.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional
import yaml

from geocluster.spatial.clustering import DBSCANConfig


DEFAULT_PROFILE = "default"
PROFILE_ENV_VAR = "GEOCLUSTER_PROFILE"


class ConfigLoader:
    """Load and manage configuration from YAML files and environment."""
    
    CONFIG_DIR = Path(__file__).parent.parent / "configs"
    
    @classmethod
    def available_profiles(cls) -> List[str]:
        """Names of the profiles found in the config directory."""
        return sorted(f.stem for f in cls.CONFIG_DIR.glob("*.yaml"))
    
    @classmethod
    def load_profile(cls, profile_name: str = DEFAULT_PROFILE) -> Dict[str, Any]:
        """
        Load a clustering profile configuration.
        
        Args:
            profile_name: Name of the profile (default, dense-city, rural)
            
        Returns:
            Dictionary with configuration values
            
        Raises:
            FileNotFoundError: If profile doesn't exist
        """
        profile_path = cls.CONFIG_DIR / f"{profile_name}.yaml"
        
        if not profile_path.exists():
            available = cls.available_profiles()
            raise FileNotFoundError(
                f"Profile '{profile_name}' not found. Available profiles: {', '.join(available)}"
            )
        
        with open(profile_path, "r") as f:
            return yaml.safe_load(f) or {}
    
    @classmethod
    def get_profile_from_env(cls) -> Optional[str]:
        """Get profile name from GEOCLUSTER_PROFILE environment variable."""
        return os.getenv(PROFILE_ENV_VAR)
    
    @classmethod
    def load_default_or_env_profile(cls) -> Dict[str, Any]:
        """
        Load profile from environment variable or use the default profile.
        
        A profile named in the environment must exist. Without one, a missing
        default profile yields an empty dict so built-in defaults apply.
        
        Returns:
            Configuration dictionary
        """
        profile = cls.get_profile_from_env()
        if profile:
            return cls.load_profile(profile)
        if not (cls.CONFIG_DIR / f"{DEFAULT_PROFILE}.yaml").exists():
            return {}
        return cls.load_profile(DEFAULT_PROFILE)


def get_config(profile_name: Optional[str] = None) -> Dict[str, Any]:
    """Convenience function to get the named, environment or default profile."""
    if profile_name:
        return ConfigLoader.load_profile(profile_name)
    return ConfigLoader.load_default_or_env_profile()


def get_dbscan_config(
    profile: Optional[Dict[str, Any]] = None,
    **overrides: Any,
) -> DBSCANConfig:
    """
    Build a :class:`DBSCANConfig` from a profile dict.
    
    Keyword overrides (``eps``, ``min_pts``, ``node_capacity``) win over the
    profile when not None; missing values fall back to the dataclass defaults.
    The result is not validated here.
    """
    profile = profile or {}
    dbscan_cfg = profile.get("dbscan") or {}
    index_cfg = profile.get("index") or {}
    
    values: Dict[str, Any] = {}
    if "eps" in dbscan_cfg:
        values["eps"] = dbscan_cfg["eps"]
    if "min_pts" in dbscan_cfg:
        values["min_pts"] = dbscan_cfg["min_pts"]
    if "node_capacity" in index_cfg:
        values["node_capacity"] = index_cfg["node_capacity"]
    
    for key, value in overrides.items():
        if value is not None:
            values[key] = value
    
    return DBSCANConfig(**values)


def get_log_level(profile: Optional[Dict[str, Any]] = None) -> str:
    """Logging level name from the profile's ``logging.level`` (default WARNING)."""
    logging_cfg = (profile or {}).get("logging") or {}
    return str(logging_cfg.get("level", "WARNING")).upper()
