# MIT License © 2025 Motohiro Suzuki
"""
process/http_serve.py

Static file server on FastAPI + uvicorn.

  /tower/<path>  -> StaticFiles over the served directory
  /<path>        -> file_handler():
                      file       -> 200, file content
                      directory  -> 200, newline-separated listing (directory path first, recursive)
                      missing    -> 404 "File <p> not found"  (also for paths escaping the root)
                      unreadable -> 500

The catch-all route is a plain (sync) function, so FastAPI runs it in its
threadpool and file-system I/O never blocks the event loop.
"""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles

logger = logging.getLogger(__name__)

HOST = "0.0.0.0"
TOWER_PREFIX = "/tower"


@dataclass(frozen=True)
class HttpServeState:
    path: Path


def visit_dir(d: Path) -> List[str]:
    files: List[str] = []
    for entry in sorted(d.iterdir()):
        files.append(str(entry))
        if entry.is_dir():
            files.extend(visit_dir(entry))
    return files


def _resolve(state: HttpServeState, rel: str) -> Path | None:
    root = state.path.resolve()
    p = (root / rel.lstrip("/")).resolve()
    if p != root and root not in p.parents:
        return None
    return p


def file_handler(state: HttpServeState, rel: str) -> Tuple[int, bytes]:
    p = _resolve(state, rel)
    shown = state.path / rel.lstrip("/")
    if p is None or not p.exists():
        logger.info("Request file: %s (not found)", shown)
        return 404, f"File {shown} not found".encode("utf-8")

    logger.info("Request file: %s", p)
    if p.is_dir():
        try:
            files = [str(p)] + visit_dir(p)
        except OSError as e:
            logger.warning("Error reading directory %s: %s", p, e)
            return 500, f"Error reading directory: {p}".encode("utf-8")
        logger.info("Read %d files", len(files))
        return 200, "\n".join(files).encode("utf-8")

    try:
        content = p.read_bytes()
    except OSError as e:
        logger.warning("Error reading file: %s", e)
        return 500, str(e).encode("utf-8")
    logger.info("Read %d bytes", len(content))
    return 200, content


def create_app(path: Path) -> FastAPI:
    state = HttpServeState(path=Path(path))
    app = FastAPI(title="acli http serve")

    # mounted before the catch-all route so /tower/* reaches StaticFiles
    app.mount(TOWER_PREFIX, StaticFiles(directory=str(state.path)), name="tower")

    @app.get("/{path:path}")
    def serve_path(path: str) -> Response:
        status, body = file_handler(state, path)
        if status != 200:
            return PlainTextResponse(body.decode("utf-8", errors="replace"), status_code=status)

        p = _resolve(state, path)
        if p is not None and p.is_dir():
            return PlainTextResponse(body.decode("utf-8", errors="replace"))
        media_type, _ = mimetypes.guess_type(str(p))
        return Response(content=body, media_type=media_type or "application/octet-stream")

    return app


def process_http_serve(path: Path, port: int, host: str = HOST) -> None:
    logger.info("Serve directory: %s on port: %d", path, port)
    uvicorn.run(create_app(path), host=host, port=port)
