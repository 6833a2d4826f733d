"""SPA Static Files — serves the built frontend with index.html fallback.

Invariants:
    - Existing files are served as-is
    - Any other non-API path answers with index.html (client-side routing)
    - Paths under api/ keep their 404 so API typos never return HTML
"""

import os

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

INDEX_DOCUMENT = "index.html"


class SinglePageAppFiles(StaticFiles):
    """StaticFiles that falls back to the SPA entry document on 404."""

    def __init__(self, directory: str):
        super().__init__(directory=directory, html=True)

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as exc:
            if exc.status_code != 404 or path == "api" or path.startswith("api/"):
                raise
            return await super().get_response(INDEX_DOCUMENT, scope)


def mount_frontend(app: FastAPI, directory: str) -> bool:
    """Mount the built frontend at / when the directory exists.

    Must run after every API router is included so /api/* takes precedence.
    """
    if not os.path.isdir(directory):
        return False
    app.mount("/", SinglePageAppFiles(directory), name="frontend")
    return True
