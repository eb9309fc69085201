"""FastAPI application entrypoint for locgen service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..emitter import DEFAULT_INTERFACE, DEFAULT_NAMESPACE
from ..generator import (
    GenerationConfig,
    MergeConflictError,
    create_generation_config,
    generate_client_declarations,
)
from ..sources import MappingSource


class ClientPayload(BaseModel):
    locales: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    name: Optional[str] = None


class GenerateRequest(BaseModel):
    clients: List[ClientPayload]
    namespace: str = DEFAULT_NAMESPACE
    interface: str = DEFAULT_INTERFACE
    strict: bool = False


class ClientResponse(BaseModel):
    index: Optional[int] = None
    source: str
    text: str


class GenerateResponse(BaseModel):
    declarations: str
    clients: List[ClientResponse]


class HealthResponse(BaseModel):
    status: str


def _build_config(payload: GenerateRequest) -> GenerationConfig:
    sources = [
        MappingSource(client.locales, name=client.name or f"client-{position + 1}")
        for position, client in enumerate(payload.clients)
    ]
    return create_generation_config(
        sources,
        namespace=payload.namespace,
        interface=payload.interface,
        strict=payload.strict,
    )


def create_app() -> FastAPI:
    """Create the FastAPI application exposing declaration generation."""
    app = FastAPI(title="locgen Service", version="1.0.0")

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/generate", response_model=GenerateResponse)
    async def generate(payload: GenerateRequest) -> GenerateResponse:
        config = _build_config(payload)
        loop = asyncio.get_running_loop()
        declarations = await loop.run_in_executor(None, generate_client_declarations, config)
        return GenerateResponse(
            declarations="\n\n".join(item.text for item in declarations),
            clients=[
                ClientResponse(
                    index=item.index,
                    source=str(item.metadata.get("source", "")),
                    text=item.text,
                )
                for item in declarations
            ],
        )

    @app.exception_handler(MergeConflictError)
    async def merge_conflict_handler(
        _: Any, exc: MergeConflictError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(
            status_code=400,
            content={
                "detail": str(exc),
                "conflicts": [".".join(conflict.path) for conflict in exc.conflicts],
            },
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(
        _: Any, exc: ValueError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
