"""
Default fallback application for the URL redirect service.
Answers every path the redirect table does not know.
"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="URL Redirect Service",
    description="Redirects known paths to their URLs",
    version="1.0.0",
    docs_url=None,
    redoc_url=None,
    openapi_url=None
)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@app.api_route("/{full_path:path}",
               methods=ALL_METHODS,
               response_class=PlainTextResponse,
               summary="Fallback for unmapped paths")
async def hello(full_path: str, request: Request):
    """Return a greeting for any path without a redirect"""
    logger.debug(f"No redirect for {request.url.path}, serving fallback")
    return "Hello, world!\n"
