"""Settings for the translator and logging setup.

Settings are read once at startup: defaults, then an optional JSON settings
file, then explicit overrides (e.g. from the command line).

The settings file is looked up at the explicit path, else at
``$DOCGUARDS_SETTINGS``. Example::

    {"distance_threshold": 3, "proposition_source": "pattern"}
"""
import json
import logging
import os
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError

SETTINGS_ENV = 'DOCGUARDS_SETTINGS'

DEFAULT_SETTINGS = {
    'distance_threshold': 2,
    'receiver': 'target',
    'parameter_style': 'name',  # 'name' | 'args'
    'proposition_source': 'spacy',  # 'spacy' | 'pattern'
    'spacy_model': 'en_core_web_sm',
    'log_level': 'WARNING',
}

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


class TranslatorSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra='forbid')

    distance_threshold: int = Field(DEFAULT_SETTINGS['distance_threshold'], ge=0)
    receiver: str = Field(DEFAULT_SETTINGS['receiver'], min_length=1)
    parameter_style: Literal['name', 'args'] = DEFAULT_SETTINGS['parameter_style']
    proposition_source: Literal['spacy', 'pattern'] = DEFAULT_SETTINGS['proposition_source']
    spacy_model: str = DEFAULT_SETTINGS['spacy_model']
    log_level: str = DEFAULT_SETTINGS['log_level']


def _read_settings_file(path: str) -> dict:
    if not os.path.exists(path):
        raise ConfigurationError(f"Settings file not found: {path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Malformed settings file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {path} must hold a JSON object")
    return data


def load_settings(path: Optional[str] = None, **overrides) -> TranslatorSettings:
    """Build settings from defaults, a settings file and overrides.

    Overrides whose value is ``None`` are ignored so that unset command line
    options do not shadow the file.
    """
    merged = DEFAULT_SETTINGS.copy()
    path = path or os.environ.get(SETTINGS_ENV)
    if path:
        merged.update(_read_settings_file(path))
    merged.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return TranslatorSettings(**merged)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e


def configure_logging(level='WARNING'):
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger('docguards').setLevel(level)
