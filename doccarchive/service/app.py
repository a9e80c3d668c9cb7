"""FastAPI application entrypoint for doccarchive service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..changelog import ChangeLogWriter
from ..differ import ArchiveComparison, ArchiveDiffer
from ..merge import MergeAction, MergeValidationError, validate_merge_request
from ..models import MergeOutcome, MergeRequest


class DiffRequest(BaseModel):
    initial: str
    newer: str
    initial_version: Optional[str] = None
    newer_version: Optional[str] = None
    write: bool = False


class DiffResponse(BaseModel):
    framework_name: str
    additions: List[str]
    removals: List[str]
    changelog_path: Optional[str] = None


class MergePayload(BaseModel):
    archives: List[str]
    landing_page_catalog: Optional[str] = None
    output_path: Optional[str] = None


class MergeResponse(BaseModel):
    output_path: str
    symbol_count: int
    collisions: dict[str, List[str]]
    conflicts: dict[str, List[str]] = {}


class HealthResponse(BaseModel):
    status: str


def _default_differ() -> ArchiveDiffer:
    return ArchiveDiffer()


def _default_merge(request: MergeRequest) -> MergeOutcome:
    return MergeAction(request).perform()


async def _run_blocking(func: Callable[[], Any]) -> Any:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, func)


def create_app(
    differ_factory: Callable[[], ArchiveDiffer] = _default_differ,
    merge_runner: Callable[[MergeRequest], MergeOutcome] = _default_merge,
) -> FastAPI:
    """Create the FastAPI application exposing diff and merge operations."""

    app = FastAPI(title="DocC Archive Service", version="1.0.0")
    writer = ChangeLogWriter()

    async def get_differ() -> ArchiveDiffer:
        return differ_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/diff", response_model=DiffResponse)
    async def diff_archives(
        payload: DiffRequest,
        differ: ArchiveDiffer = Depends(get_differ),
    ) -> DiffResponse:
        for archive in (payload.initial, payload.newer):
            if not Path(archive).exists():
                raise FileNotFoundError(f"Archive not found: {archive}")

        comparison: ArchiveComparison = await _run_blocking(
            lambda: differ.compare(payload.initial, payload.newer)
        )
        changelog_path = None
        if payload.write:
            written = await _run_blocking(
                lambda: writer.write(
                    comparison,
                    initial_version=payload.initial_version,
                    newer_version=payload.newer_version,
                )
            )
            changelog_path = str(written)

        return DiffResponse(
            framework_name=comparison.framework_name,
            additions=comparison.result.addition_links,
            removals=comparison.result.removal_links,
            changelog_path=changelog_path,
        )

    @app.post("/merge", response_model=MergeResponse)
    async def merge(payload: MergePayload) -> MergeResponse:
        request = validate_merge_request(
            payload.archives,
            payload.landing_page_catalog,
            payload.output_path,
        )
        outcome: MergeOutcome = await _run_blocking(lambda: merge_runner(request))
        return MergeResponse(
            output_path=str(outcome.output),
            symbol_count=outcome.symbol_count,
            collisions=outcome.collisions,
            conflicts=outcome.conflicts,
        )

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(MergeValidationError)
    async def validation_error_handler(
        _: Any, exc: MergeValidationError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "0.0.0.0", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
