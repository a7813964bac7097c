"""Configuration module for the waste manager."""
from .settings import WasteManagerConfig, get_config, DELETE_MODES, LOG_FORMATS

__all__ = [
    'WasteManagerConfig',
    'get_config',
    'DELETE_MODES',
    'LOG_FORMATS'
]
