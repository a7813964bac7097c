"""Cloud Waste Manager: idle AWS resource inventory and dashboard."""

__version__ = "0.1.0"
