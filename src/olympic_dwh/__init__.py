"""Olympic data warehouse: Bronze/Silver/Gold pipeline for Olympic athlete results."""

__version__ = "0.1.0"
