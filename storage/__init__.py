"""Storage package for loading trade datasets and persisting replay results."""

from .json_store import JsonResultStore, load_dataset

__all__ = ["JsonResultStore", "load_dataset"]
