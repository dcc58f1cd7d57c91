# edge.py
from __future__ import annotations
from typing import Tuple

class Edge:
    """View entry of one graph edge; holds the endpoint indices, not vertex references."""
    __slots__ = ("_endpoints",)

    def __init__(self, endpoints: Tuple[int, int]):
        a, b = endpoints
        self._endpoints = (int(a), int(b))

    # --- Getters ---
    def getEndpoints(self) -> Tuple[int, int]: return self._endpoints
    def getStartIndex(self) -> int: return self._endpoints[0]
    def getEndIndex(self) -> int: return self._endpoints[1]
    def isLoop(self) -> bool: return self._endpoints[0] == self._endpoints[1]

    def __repr__(self):
        return f"E({self._endpoints[0]} - {self._endpoints[1]})"
