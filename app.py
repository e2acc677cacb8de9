"""
Main application entry point for the URL redirect service.
"""

import sys
import logging
import argparse
import uvicorn

import config
from api import app as fallback_app
from errors import HandlerConstructionError
from handler import RedirectHandler, make_handler

logger = logging.getLogger("app")


def parse_arguments(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='Serve redirects for the paths in a data file')

    parser.add_argument('-f', '--file', default=config.DATA_FILE,
                        help='YAML, JSON or SQLite (.db) data file (default: %(default)s)')

    parser.add_argument('--host', default=config.HOST,
                        help='Interface to listen on')

    parser.add_argument('--port', type=int, default=config.PORT,
                        help='Port to listen on')

    parser.add_argument('--verbose', action='store_true',
                        help='Enable verbose logging')

    return parser.parse_args(argv)


def initialize_app(data_file: str) -> RedirectHandler:
    """
    Build the redirect handler in front of the default fallback app

    Args:
        data_file (str): Path of the data file

    Returns:
        RedirectHandler: The ASGI application to serve
    """
    logger.info(f"Initializing URL redirect service from {data_file}")
    return make_handler(data_file, fallback_app)


def start(argv=None):
    """Start the redirect service with Uvicorn"""
    args = parse_arguments(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
        format=config.LOG_FORMAT
    )

    try:
        handler = initialize_app(args.file)
    except HandlerConstructionError as e:
        logger.error(f"Failed to process data file:\n\t{e}")
        sys.exit(1)

    uvicorn.run(
        handler,
        host=args.host,
        port=args.port,
        log_level="debug" if args.verbose else "info"
    )


if __name__ == "__main__":
    start()
