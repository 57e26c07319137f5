"""
Sugar configuration loader

Reads sugar.tsv (key<TAB>value rows) to configure namespace self-logging.
Falls back to environment variables or defaults if the config file doesn't
exist.
"""

import csv
import os
from pathlib import Path
from typing import Dict, Optional

from .core.self_logger import LEVELS


DEFAULT_CONFIG_FILE = 'sugar.tsv'

_ENV_KEYS = {
    'log_dir': 'PRIMITIVE_SUGAR_LOG_DIR',
    'log_level': 'PRIMITIVE_SUGAR_LOG_LEVEL',
    'max_log_entries': 'PRIMITIVE_SUGAR_MAX_LOG_ENTRIES',
}

_DEFAULTS = {
    'log_dir': '',
    'log_level': 'INFO',
    'max_log_entries': '1000',
}


class SugarConfig:
    """Load and manage primitive-sugar configuration"""

    def __init__(self, config_file: Optional[str] = None):
        self.config_file = Path(
            config_file or os.environ.get('PRIMITIVE_SUGAR_CONFIG', DEFAULT_CONFIG_FILE)
        )
        self.log_dir: Optional[Path] = None
        self.log_level = 'INFO'
        self.max_log_entries = 1000
        self._load()

    def _load(self):
        """Load configuration from TSV file, else from the environment"""
        if self.config_file.exists():
            values = self._read_file()
        else:
            values = {
                key: os.environ.get(env_key, _DEFAULTS[key])
                for key, env_key in _ENV_KEYS.items()
            }

        log_dir = (values.get('log_dir') or '').strip()
        self.log_dir = Path(log_dir) if log_dir else None

        log_level = (values.get('log_level') or _DEFAULTS['log_level']).strip().upper()
        if log_level not in LEVELS:
            raise ValueError(
                f"Invalid log_level {log_level!r} in {self._source()}; "
                f"expected one of {', '.join(LEVELS)}"
            )
        self.log_level = log_level

        max_entries = (values.get('max_log_entries') or _DEFAULTS['max_log_entries']).strip()
        try:
            self.max_log_entries = int(max_entries)
        except ValueError:
            raise ValueError(
                f"Invalid max_log_entries {max_entries!r} in {self._source()}"
            )
        if self.max_log_entries < 1:
            raise ValueError(
                f"max_log_entries must be positive, got {self.max_log_entries}"
            )

    def _read_file(self) -> Dict[str, str]:
        """Read key/value rows, skipping comments and blank keys"""
        values = dict(_DEFAULTS)
        with open(self.config_file, 'r', encoding='utf-8') as f:
            reader = csv.DictReader(
                (line for line in f if not line.startswith('#')),
                delimiter='\t',
            )
            for row in reader:
                key = (row.get('key') or '').strip()
                if not key:
                    continue
                values[key] = (row.get('value') or '').strip()
        return values

    def _source(self) -> str:
        if self.config_file.exists():
            return str(self.config_file)
        return 'environment'

    def as_dict(self) -> Dict[str, object]:
        """Get the effective configuration"""
        return {
            'config_file': str(self.config_file),
            'log_dir': str(self.log_dir) if self.log_dir else None,
            'log_level': self.log_level,
            'max_log_entries': self.max_log_entries,
        }


# Global instance (lazy loaded)
_config = None


def get_config() -> SugarConfig:
    """Get the global configuration"""
    global _config
    if _config is None:
        _config = SugarConfig()
    return _config


def reload_config() -> SugarConfig:
    """Reload configuration from file / environment"""
    global _config
    _config = SugarConfig()
    return _config
