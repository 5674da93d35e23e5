"""Local stand-in for object storage.

Accepts ``PUT /upload/{filename}`` and writes the body under
``MOCK_STORAGE_DIR``, so the API server can be exercised end to end with
``presignedUrl=http://localhost:9000/upload/<name>``.
"""
from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from texture_uploader.config import get_settings

logger = logging.getLogger(__name__)


def create_app(storage_dir: str | Path | None = None, body_limit: int | None = None) -> FastAPI:
    settings = get_settings()
    root = Path(storage_dir if storage_dir is not None else settings.mock_storage_dir)
    limit = body_limit if body_limit is not None else settings.mock_storage_body_limit

    application = FastAPI(title="Mock Storage")

    @application.put("/upload/{filename}")
    async def upload_file(filename: str, request: Request):
        logger.info("Received upload request for file: %s", filename)

        if "/" in filename or "\\" in filename or filename in ("", ".", ".."):
            logger.error("Rejected unsafe filename: %s", filename)
            return JSONResponse(status_code=400, content={"detail": "Invalid filename"})

        body = await request.body()
        if not body:
            logger.error("Empty file body received")
            return JSONResponse(status_code=400, content={"detail": "Empty body"})
        if len(body) > limit:
            logger.error("Body of %d bytes exceeds limit %d", len(body), limit)
            return JSONResponse(status_code=413, content={"detail": "Payload Too Large"})

        file_path = root / filename
        try:
            if not root.exists():
                logger.info("Creating storage directory: %s", root)
                root.mkdir(parents=True, exist_ok=True)
            logger.info("Saving file: %s (size: %d bytes) to %s", filename, len(body), file_path)
            file_path.write_bytes(body)
        except OSError as exc:
            logger.error("Failed to write file %s: %s", file_path, exc)
            return JSONResponse(status_code=500, content={"detail": "Failed to store file"})

        logger.info("File saved successfully: %s", file_path)
        return PlainTextResponse("File uploaded successfully")

    return application


app = create_app()


def run() -> None:  # pragma: no cover
    import uvicorn

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    logger.info("Mock storage server listening on http://0.0.0.0:%d", settings.mock_storage_port)
    uvicorn.run(app, host="0.0.0.0", port=settings.mock_storage_port)
