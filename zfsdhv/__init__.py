"""Nomad dynamic host volume plugin that provisions volumes as ZFS datasets."""

__version__ = "1.0.0"

__all__ = ["__version__"]