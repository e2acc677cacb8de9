"""
Builds the routing table used by the redirect handler.
"""

from types import MappingProxyType
from typing import Iterable, Mapping

from models import RouteEntry


def build_route_table(entries: Iterable[RouteEntry]) -> Mapping[str, str]:
    """
    Build a path -> url table from parsed entries

    Later entries overwrite earlier ones with the same path.

    Args:
        entries: RouteEntry objects in source order

    Returns:
        Mapping: Read-only view of the table
    """
    table = {}
    for entry in entries:
        table[entry.path] = entry.url
    return MappingProxyType(table)
