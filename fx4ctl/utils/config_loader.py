"""
Configuration Loader

Utilities for loading YAML configuration files with validation.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional
import os


class ConfigLoader:
    """
    Load and validate YAML configuration files.
    """
    
    @staticmethod
    def load(config_path: str, required_keys: Optional[list] = None) -> Dict[str, Any]:
        """
        Load a YAML configuration file.
        
        Args:
            config_path: Path to YAML file
            required_keys: List of keys that must be present in config
        
        Returns:
            Configuration dictionary
        
        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If required keys are missing or the file is not a mapping
            yaml.YAMLError: If YAML is invalid
        """
        path = Path(config_path)
        
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        
        with open(path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
        
        if config is None:
            config = {}
        
        if not isinstance(config, dict):
            raise ValueError(f"Configuration file must contain a mapping: {config_path}")
        
        if required_keys:
            missing = [key for key in required_keys if key not in config]
            if missing:
                raise ValueError(f"Missing required configuration keys: {missing}")
        
        return config
    
    @staticmethod
    def env_overrides(env_prefix: str = "FX4_") -> Dict[str, str]:
        """
        Collect overrides from environment variables.
        
        FX4_HOST=10.0.0.42 gives {'host': '10.0.0.42'}.
        """
        return {
            key[len(env_prefix):].lower(): value
            for key, value in os.environ.items()
            if key.startswith(env_prefix) and len(key) > len(env_prefix)
        }
    
    @staticmethod
    def load_with_env_override(
        config_path: Optional[str],
        env_prefix: str = "FX4_",
        required_keys: Optional[list] = None
    ) -> Dict[str, Any]:
        """
        Load config and override with environment variables.
        
        Environment variables matching env_prefix will override config values.
        For example, FX4_HOST will override config['host']. Required keys
        are checked after the overrides are applied.
        
        Args:
            config_path: Path to YAML file, or None to use the environment only
            env_prefix: Prefix for environment variables
            required_keys: List of keys that must be present after overrides
        
        Returns:
            Configuration dictionary with env overrides applied
        """
        config = ConfigLoader.load(config_path) if config_path is not None else {}
        config.update(ConfigLoader.env_overrides(env_prefix))
        
        if required_keys:
            missing = [key for key in required_keys if key not in config]
            if missing:
                raise ValueError(f"Missing required configuration keys: {missing}")
        
        return config
