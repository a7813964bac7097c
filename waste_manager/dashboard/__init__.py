"""Terminal dashboard for the idle resource inventory."""
from .client import ApiClient, FetchResult
from .state import ALL, DashboardState, filter_resources, summarize_resources
from .export import write_workbook
from .app import DashboardApp

__all__ = [
    'ALL',
    'ApiClient',
    'DashboardApp',
    'DashboardState',
    'FetchResult',
    'filter_resources',
    'summarize_resources',
    'write_workbook'
]
