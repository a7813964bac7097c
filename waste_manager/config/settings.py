"""Waste manager configuration settings."""
from dataclasses import dataclass, field
from typing import Optional
import os
import json
import logging

logger = logging.getLogger(__name__)

DELETE_MODES = ('noop', 'provider')
LOG_FORMATS = ('text', 'json')


def _default_region() -> str:
    return os.getenv('AWS_REGION') or os.getenv('AWS_DEFAULT_REGION') or 'us-east-1'


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class WasteManagerConfig:
    """Configuration shared by the aggregator service and the dashboard."""

    # Provider settings
    region: str = field(default_factory=_default_region)
    max_concurrent_sources: int = 4

    # Timeouts (seconds)
    provider_timeout: float = 30.0
    connect_timeout: float = 5.0
    read_timeout: float = 20.0

    # Aggregation and delete behaviour
    partial_results: bool = True
    delete_mode: str = 'noop'  # 'noop' or 'provider'

    # HTTP service
    cors_origin: str = '*'
    host: str = '0.0.0.0'
    port: int = 8080

    # Dashboard
    api_url: str = 'http://localhost:8080'
    http_timeout: float = 30.0
    export_path: str = 'aws-resources.xlsx'

    # Logging
    log_level: str = 'INFO'
    log_format: str = 'text'  # 'text' or 'json'

    def __post_init__(self):
        """Validate enumerated settings."""
        if self.delete_mode not in DELETE_MODES:
            raise ValueError(f"delete_mode must be one of {DELETE_MODES}, got {self.delete_mode!r}")
        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {LOG_FORMATS}, got {self.log_format!r}")

    @classmethod
    def from_file(cls, config_path: str) -> 'WasteManagerConfig':
        """Load configuration from a JSON file."""
        try:
            with open(config_path, 'r') as f:
                config_data = json.load(f)
            return cls(**config_data)
        except FileNotFoundError:
            logger.info(f"Config file {config_path} not found, using defaults")
            return cls()
        except (ValueError, TypeError) as e:
            logger.error(f"Error loading config file: {e}, using defaults")
            return cls()

    @classmethod
    def from_env(cls) -> 'WasteManagerConfig':
        """Load configuration from environment variables."""
        config = cls()

        # Override with environment variables if present
        if os.getenv('WASTE_MANAGER_PROVIDER_TIMEOUT'):
            config.provider_timeout = float(os.getenv('WASTE_MANAGER_PROVIDER_TIMEOUT'))

        if os.getenv('WASTE_MANAGER_PARTIAL_RESULTS'):
            config.partial_results = _env_bool(os.getenv('WASTE_MANAGER_PARTIAL_RESULTS'))

        if os.getenv('WASTE_MANAGER_DELETE_MODE'):
            config.delete_mode = os.getenv('WASTE_MANAGER_DELETE_MODE')

        if os.getenv('WASTE_MANAGER_CORS_ORIGIN'):
            config.cors_origin = os.getenv('WASTE_MANAGER_CORS_ORIGIN')

        if os.getenv('WASTE_MANAGER_PORT'):
            config.port = int(os.getenv('WASTE_MANAGER_PORT'))

        if os.getenv('API_URL'):
            config.api_url = os.getenv('API_URL')

        if os.getenv('WASTE_MANAGER_LOG_LEVEL'):
            config.log_level = os.getenv('WASTE_MANAGER_LOG_LEVEL')

        if os.getenv('WASTE_MANAGER_LOG_FORMAT'):
            config.log_format = os.getenv('WASTE_MANAGER_LOG_FORMAT')

        # Re-run validation on overridden values
        config.__post_init__()
        return config


_config: Optional[WasteManagerConfig] = None


def get_config() -> WasteManagerConfig:
    """Get the global waste manager configuration."""
    global _config
    if _config is None:
        # Try to load from file first, then fall back to env vars
        config_path = os.getenv('WASTE_MANAGER_CONFIG', 'waste-manager-config.json')
        if os.path.exists(config_path):
            _config = WasteManagerConfig.from_file(config_path)
        else:
            _config = WasteManagerConfig.from_env()
    return _config
