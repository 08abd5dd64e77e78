"""Stateless translation and session bookkeeping shared by all drivers."""

from nodebridge.core.session import SessionState
from nodebridge.core.translator import (
    NODELINK2_LOAD_TYPE_MAP,
    Nodelink2LoadType,
    nodelink2_to_canonical,
    translate_load_result,
)

__all__ = [
    "NODELINK2_LOAD_TYPE_MAP",
    "Nodelink2LoadType",
    "SessionState",
    "nodelink2_to_canonical",
    "translate_load_result",
]
