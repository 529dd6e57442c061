"""
Adapters layer - poll storage and the JSON boundary.
"""

from .json_contract import load_snapshot, parse_response, parse_snapshot, report_to_payload
from .memory_repository import InMemoryPollRepository

__all__ = [
    "InMemoryPollRepository",
    "load_snapshot",
    "parse_response",
    "parse_snapshot",
    "report_to_payload",
]
