"""Configuration loader for YAML and environment variables."""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from dotenv import load_dotenv

from ..exceptions import ConfigurationError
from ..settings import ProfilerConfig


DELIMITERS = {
    'tab': '\t',
    'comma': ',',
}


class ConfigLoader:
    """Loads and manages configuration from YAML and environment variables."""

    def __init__(self, config_path: Optional[str] = None, env_path: Optional[str] = None):
        """
        Initialize configuration loader.

        Args:
            config_path: Path to YAML config file (default: config/config.yaml if present)
            env_path: Path to .env file (default: .env in working directory)
        """
        if env_path:
            load_dotenv(env_path)
        else:
            load_dotenv()

        if config_path is None:
            config_path = self._find_config_file()
        elif not Path(config_path).exists():
            raise ConfigurationError(
                f"Config file not found: {config_path}",
                details={'config_path': config_path}
            )

        self.config = self._load_yaml(config_path) if config_path else {}
        self._merge_env_overrides()

    def _find_config_file(self) -> Optional[str]:
        """Find config.yaml in project structure; scanning works without one."""
        possible_paths = [
            Path(__file__).parent.parent.parent.parent / 'config' / 'config.yaml',
            Path('config/config.yaml'),
        ]

        for path in possible_paths:
            if path.exists():
                return str(path)

        return None

    def _load_yaml(self, path: str) -> Dict[str, Any]:
        """Load YAML configuration file."""
        try:
            with open(path, 'r') as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in {path}: {e}",
                details={'config_path': path},
                original_exception=e
            )

    def _merge_env_overrides(self):
        """Override config values with environment variables if present."""
        int_overrides = {
            'SCAN_MAX_ROWS': 'row_budget',
            'SCAN_MAX_DISTINCT_VALUES': 'max_distinct_values',
            'SCAN_MIN_CELL_COUNT': 'min_cell_count',
            'SCAN_SEED': 'seed',
            'SCAN_WORKERS': 'workers',
        }

        for env_name, key in int_overrides.items():
            raw = os.getenv(env_name)
            if not raw:
                continue
            try:
                self.config.setdefault('profiling', {})[key] = int(raw)
            except ValueError as e:
                raise ConfigurationError(
                    f"{env_name} must be an integer, got '{raw}'",
                    details={'variable': env_name},
                    original_exception=e
                )

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Example: config.get('profiling.min_cell_count')
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default

            if value is None:
                return default

        return value

    def get_all(self) -> Dict[str, Any]:
        """Get entire configuration dictionary."""
        return self.config

    def to_profiler_config(self, **overrides: Any) -> ProfilerConfig:
        """
        Build a ProfilerConfig from the ``profiling`` section.

        Args:
            **overrides: Values taking precedence over the file (None is ignored)

        Returns:
            ProfilerConfig instance
        """
        section = dict(self.get('profiling', {}) or {})
        section.update({k: v for k, v in overrides.items() if v is not None})

        delimiter = section.get('delimiter', 'tab')
        if delimiter in DELIMITERS:
            section['delimiter'] = DELIMITERS[delimiter]

        excluded = section.get('excluded_columns') or []
        if isinstance(excluded, str):
            excluded = excluded.split(',')
        section['excluded_columns'] = frozenset(c.strip() for c in excluded if c.strip())

        known = set(ProfilerConfig.__dataclass_fields__)
        unknown = set(section) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown profiling settings: {sorted(unknown)}",
                details={'unknown': sorted(unknown)}
            )

        config = ProfilerConfig(**section)
        if config.min_cell_count < 1:
            raise ConfigurationError("min_cell_count must be at least 1")
        if config.max_distinct_values < 1:
            raise ConfigurationError("max_distinct_values must be at least 1")
        if not 0.0 < config.success_threshold <= 1.0:
            raise ConfigurationError("success_threshold must be in (0, 1]")
        return config
