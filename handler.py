"""
Redirect handler construction and request dispatch.

make_handler() reads a data file once, at startup, and returns an ASGI
application that redirects known paths and passes everything else to a
fallback ASGI application.
"""

import logging
from types import MappingProxyType
from typing import Mapping

from starlette.responses import RedirectResponse
from starlette.types import ASGIApp, Receive, Scope, Send

import config
from db import parse_sqlite_db
from errors import UnsupportedFormatError
from models import SourceKind
from parsers import detect_source_kind, parse_json, parse_yaml
from route_table import build_route_table

logger = logging.getLogger(__name__)

PARSERS = {
    SourceKind.YAML: parse_yaml,
    SourceKind.JSON: parse_json,
    SourceKind.DATABASE: parse_sqlite_db,
}


class RedirectHandler:
    """
    ASGI application mapping request paths to redirect targets

    The route table is read-only once the handler is built, so a single
    instance can serve concurrent requests without locking.
    """

    def __init__(self, routes: Mapping[str, str], fallback: ASGIApp):
        self.routes = routes
        self.fallback = fallback

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            dest = self.routes.get(scope["path"])
            if dest is not None:
                logger.debug(f"Redirecting {scope['path']} -> {dest}")
                response = RedirectResponse(url=dest, status_code=config.REDIRECT_TYPE)
                await response(scope, receive, send)
                return
        await self.fallback(scope, receive, send)


def map_handler(paths_to_urls: Mapping[str, str], fallback: ASGIApp) -> RedirectHandler:
    """
    Build a handler from an in-memory mapping

    Args:
        paths_to_urls: Mapping of request path to redirect URL
        fallback: ASGI application called for paths not in the mapping

    Returns:
        RedirectHandler: The dispatching ASGI application
    """
    return RedirectHandler(MappingProxyType(dict(paths_to_urls)), fallback)


def make_handler(data_file_path: str, fallback: ASGIApp) -> RedirectHandler:
    """
    Build a handler from a YAML, JSON or SQLite data file

    The file kind is taken from its extension (.yaml, .json or .db,
    case-insensitive).

    Args:
        data_file_path (str): Path of the data file
        fallback: ASGI application called for unknown paths

    Returns:
        RedirectHandler: The dispatching ASGI application

    Raises:
        UnsupportedFormatError: The extension is not recognized
        SourceIOError, FormatError, QueryError, ScanError: Reading the file failed
    """
    kind = detect_source_kind(data_file_path)
    if kind is SourceKind.UNSUPPORTED:
        logger.error(f"Unsupported data file extension: {data_file_path}")
        raise UnsupportedFormatError(
            data_file_path,
            "detect data format of",
            ValueError("extension must be 'yaml', 'json' or 'db'"),
        )

    entries = PARSERS[kind](data_file_path)
    routes = build_route_table(entries)
    logger.info(f"Loaded {len(routes)} routes from {kind.value} file {data_file_path}")

    return RedirectHandler(routes, fallback)
