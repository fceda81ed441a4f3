"""skinforge - launcher skin editor model and patcher build pipeline."""

__version__ = "0.1.0"
