"""Transport adapters that run ini_splice operations."""

from ini_splice.adapters._async import AsyncAdapter
from ini_splice.adapters._blocking import BlockingAdapter

__all__ = ["AsyncAdapter", "BlockingAdapter"]
