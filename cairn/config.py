#!/usr/bin/env python3
"""
Configuration Management for the cairn dictionary lookup
Supports environment variables, a JSON config file, and built-in defaults
"""

import os
import json
import logging
from typing import Dict, Optional, Any
from pathlib import Path
from dataclasses import dataclass, asdict, fields

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path.home() / '.cairn_dict.json'

# Environment variable -> settings field
ENV_VARS = {
    'CAIRN_DICT_API': 'dictionary_api_base',
    'CAIRN_WORD_LIST_URL': 'word_list_url',
    'CAIRN_WIKTIONARY_API': 'wiktionary_api',
    'CAIRN_ETYMONLINE_BASE': 'etymonline_base',
    'CAIRN_HISTORY_DB': 'history_db',
    'CAIRN_MAX_EDIT_DISTANCE': 'max_edit_distance',
    'CAIRN_HTTP_TIMEOUT': 'http_timeout',
    'CAIRN_WORD_LIST_TIMEOUT': 'word_list_timeout',
    'CAIRN_RECENT_WORDS': 'recent_words',
    'CAIRN_USER_AGENT': 'user_agent',
}


@dataclass
class LookupSettings:
    """Settings for the dictionary lookup with validation"""
    dictionary_api_base: str = 'https://api.dictionaryapi.dev/api/v2/entries/en'
    word_list_url: str = 'https://raw.githubusercontent.com/dwyl/english-words/master/words_alpha.txt'
    wiktionary_api: str = 'https://en.wiktionary.org/w/api.php'
    etymonline_base: str = 'https://www.etymonline.com/word/'
    history_db: str = str(Path.home() / '.cairn_dict.db')
    max_edit_distance: int = 3
    http_timeout: float = 15.0
    word_list_timeout: float = 30.0
    recent_words: int = 3
    user_agent: str = 'cairn/1.0 (CLI dictionary tool)'
    log_level: str = 'WARNING'
    log_format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    def __post_init__(self):
        """Coerce numeric values and validate after initialization"""
        self.max_edit_distance = int(self.max_edit_distance)
        self.http_timeout = float(self.http_timeout)
        self.word_list_timeout = float(self.word_list_timeout)
        self.recent_words = int(self.recent_words)

        if self.max_edit_distance < 1:
            raise ValueError("max_edit_distance must be a positive integer")
        if self.http_timeout <= 0 or self.word_list_timeout <= 0:
            raise ValueError("HTTP timeouts must be positive")
        if self.recent_words < 0:
            raise ValueError("recent_words cannot be negative")
        if not self.dictionary_api_base:
            raise ValueError("dictionary_api_base is required")

        self.dictionary_api_base = self.dictionary_api_base.rstrip('/')
        if not self.etymonline_base.endswith('/'):
            self.etymonline_base += '/'

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class SettingsManager:
    """Settings loader with environment variable support"""

    def __init__(self, config_file: Optional[Path] = None):
        self._settings: Optional[LookupSettings] = None
        self._config_file = Path(config_file).expanduser() if config_file else DEFAULT_CONFIG_FILE

    def get_settings(self) -> LookupSettings:
        """
        Get lookup settings, merging sources in priority order:
        1. Environment variables
        2. JSON config file
        3. Built-in defaults
        """
        if self._settings is None:
            self._settings = self._load_settings()

        return self._settings

    def _load_settings(self) -> LookupSettings:
        values: Dict[str, Any] = {}

        if self._config_file.exists():
            logger.info(f"Loading settings from {self._config_file}")
            values.update(self._load_from_file())

        env_values = self._load_from_environment()
        if env_values:
            logger.info(f"Overriding {len(env_values)} setting(s) from environment variables")
            values.update(env_values)

        return LookupSettings(**values)

    def _load_from_file(self) -> Dict[str, Any]:
        """Load known settings keys from the JSON config file"""
        try:
            with open(self._config_file, 'r') as f:
                config_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading config file {self._config_file}: {e}")
            return {}

        if not isinstance(config_data, dict):
            logger.error(f"Config file {self._config_file} must contain a JSON object")
            return {}

        known = {f.name for f in fields(LookupSettings)}
        section = config_data.get('dict', config_data)
        if not isinstance(section, dict):
            logger.error(f"Config file {self._config_file}: 'dict' must be a JSON object")
            return {}

        unknown = set(section) - known
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")
        return {k: v for k, v in section.items() if k in known}

    def _load_from_environment(self) -> Dict[str, Any]:
        return {
            field_name: os.environ[env_name]
            for env_name, field_name in ENV_VARS.items()
            if os.getenv(env_name)
        }

    def get_config_info(self) -> Dict[str, Any]:
        """Describe where the active settings came from"""
        return {
            'settings': self.get_settings().to_dict(),
            'config_sources': {
                'env_variables': bool(self._load_from_environment()),
                'config_file': self._config_file.exists(),
            }
        }


# Global settings manager instance
settings_manager = SettingsManager()


def get_settings() -> LookupSettings:
    """Get the process-wide lookup settings"""
    return settings_manager.get_settings()
