"""FastAPI application exposing the converter over HTTP.

Run with:

    python -m pdf_converter

Exposes:

    GET  /              upload form
    GET  /health        liveness probe
    POST /api/convert   multipart upload (file, format, normalizeLineBreaks)
"""

import re
from typing import Optional
from urllib.parse import quote

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response

from pdf_converter import __version__
from pdf_converter.config import ConverterConfig, ServerConfig
from pdf_converter.exceptions import (
    BodyTooLargeError,
    ConverterError,
    FileTooLargeError,
    UnsupportedContentTypeError,
)
from pdf_converter.handler import ConversionHandler
from pdf_converter.logger import get_logger, set_request_id

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Anything not listed is a client error (400)
ERROR_STATUS_CODES = (
    (BodyTooLargeError, 413),
    (FileTooLargeError, 413),
    (UnsupportedContentTypeError, 415),
)

INDEX_HTML = """<!doctype html>
<html><head><meta charset="utf-8"><title>PDF Text Converter</title></head>
<body style="font-family:system-ui;padding:2rem;max-width:720px">
<h2>PDF Text Converter</h2>
<form action="/api/convert" method="post" enctype="multipart/form-data">
  <p><input type="file" name="file" accept=".pdf,application/pdf" required></p>
  <p>
    Output format:
    <select name="format">
      <option value="txt">Plain text (.txt)</option>
      <option value="md">Markdown (.md)</option>
      <option value="csv">CSV (.csv)</option>
    </select>
  </p>
  <p><label><input type="checkbox" name="normalizeLineBreaks" value="true">
    Rejoin wrapped lines</label></p>
  <button type="submit">Convert</button>
</form>
</body></html>"""


def status_for(exc: ConverterError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 400


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback and an RFC 5987 UTF-8 name."""
    fallback = re.sub(r'[^\x20-\x7e]|["\\]', "_", filename)
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


def create_app(
    config: Optional[ConverterConfig] = None,
    server_config: Optional[ServerConfig] = None,
) -> FastAPI:
    """Build the HTTP application."""
    server_config = server_config or ServerConfig()
    handler = ConversionHandler(config=config)

    app = FastAPI(title="PDF Text Converter", version=__version__)
    app.state.handler = handler

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(server_config.cors_origins),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
        expose_headers=["Content-Disposition", REQUEST_ID_HEADER],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @app.get("/", response_class=HTMLResponse)
    def index() -> str:
        return INDEX_HTML

    @app.get("/health")
    def health_check() -> dict:
        return {"status": "ok", "version": __version__}

    @app.options("/api/convert", include_in_schema=False)
    @app.options("/api/convert/", include_in_schema=False)
    def convert_options() -> Response:
        return Response(status_code=204)

    @app.post("/api/convert")
    @app.post("/api/convert/", include_in_schema=False)
    async def convert(request: Request) -> Response:
        try:
            result = await handler.handle(
                request.headers.get("content-type"), request.stream()
            )
        except ConverterError as exc:
            status_code = status_for(exc)
            logger.warning(
                "Conversion rejected",
                extra_data={
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                    "status_code": status_code,
                },
            )
            return JSONResponse({"error": str(exc) or "Conversion failed"}, status_code=status_code)
        except Exception:
            logger.error("Conversion failed unexpectedly", exc_info=True)
            return JSONResponse({"error": "Internal server error"}, status_code=500)

        return Response(
            content=result.content,
            media_type=result.media_type,
            headers={"Content-Disposition": content_disposition(result.filename)},
        )

    return app
