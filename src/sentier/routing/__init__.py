"""Routing: exact-match route tables.

Routes are keyed by path (or by method, in script mode). Lookups are
plain dictionary hits; there is no pattern matching.
"""

from sentier.routing.route import Route
from sentier.routing.table import RouteTable

__all__ = ["Route", "RouteTable"]
