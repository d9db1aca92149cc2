import yaml

from pathlib import Path
from typing import Any, Optional

def load_config(config_path: str = 'cfg/config.yaml', subconfig: Optional[str] = None) -> dict[str, Any]:
   """
   Load configuration from YAML file.

   Args:
      config_path: Path to config.yaml file.
      subconfig: Optional top-level section to return instead of the whole file.

   Returns:
      Configuration (or the requested section) as a dictionary.

   Raises:
      RuntimeError: If the file is missing, unreadable or lacks the section.
   """
   config_file = Path(config_path)
   if not config_file.exists():
      raise RuntimeError(f"Failed to load config.yaml: not found at {config_path}")

   try:
      with open(config_file, 'r', encoding='utf-8') as f:
         config = yaml.safe_load(f) or {}
   except (OSError, yaml.YAMLError) as e:
      raise RuntimeError(f"Failed to load config.yaml: {e}")

   if not isinstance(config, dict):
      raise RuntimeError("Failed to load config.yaml: top level must be a mapping")

   if subconfig is None:
      return config
   if subconfig not in config:
      raise RuntimeError(f"Section '{subconfig}' not found in {config_path}")
   return config[subconfig] or {}
