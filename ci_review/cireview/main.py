"""FastAPI application -- CI Review entrypoint."""

from __future__ import annotations

import json
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI

import cireview.deps as deps
from cireview.api.compare import router as compare_router
from cireview.api.practices import router as practices_router
from cireview.deps import ServiceOptions

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def _load_options() -> ServiceOptions:
    """Load options from the JSON options file or env fallback."""
    opts_path = os.environ.get("CIREVIEW_OPTIONS_PATH", "/data/options.json")
    if Path(opts_path).exists():
        return ServiceOptions(**json.loads(Path(opts_path).read_text()))
    return ServiceOptions(
        similarity_threshold=float(os.environ.get("SIMILARITY_THRESHOLD", "0.8")),
        max_batch_pairs=int(os.environ.get("MAX_BATCH_PAIRS", "50")),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: load options on startup, clear them on shutdown."""
    log_level = logging.DEBUG if os.environ.get("CIREVIEW_DEV_MODE") else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    deps._options = _load_options()
    logger.info("CI Review starting with options: %s", deps._options.model_dump())

    yield

    deps._options = None


app = FastAPI(
    title="CI Review",
    version=VERSION,
    lifespan=lifespan,
)

app.include_router(compare_router)
app.include_router(practices_router)


@app.get("/api/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": VERSION}
