"""FastAPI application entry point."""
from __future__ import annotations
import logging
import os
import sqlite3

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from conceptcraft import container
from conceptcraft.ai.gateway import GenerationUnavailable
from conceptcraft.api import auth, concepts, frameworks, generation, public
from conceptcraft.core.config import CORS_ORIGINS, LOG_LEVEL
from conceptcraft.persistence.db import init_db

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# ------------------------------------------------------------------
# App creation
# ------------------------------------------------------------------
app = FastAPI(
    title="ConceptCraft API",
    description="Admin and public API for framework concepts with AI-generated metaphors and stories",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ------------------------------------------------------------------
# Error handlers
# ------------------------------------------------------------------
@app.exception_handler(GenerationUnavailable)
async def generation_unavailable_handler(request: Request, exc: GenerationUnavailable):
    logger.error("AI generation unavailable for %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content={"detail": "AI generation is unavailable, please try again"},
    )


@app.exception_handler(sqlite3.Error)
async def storage_error_handler(request: Request, exc: sqlite3.Error):
    logger.exception("Storage error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Storage error, please resubmit"})


# ------------------------------------------------------------------
# Startup / shutdown
# ------------------------------------------------------------------
@app.on_event("startup")
def on_startup():
    init_db()


@app.on_event("shutdown")
async def on_shutdown():
    if container.get_llm_gateway.cache_info().currsize:
        await container.get_llm_gateway().aclose()


# ------------------------------------------------------------------
# Routers
# ------------------------------------------------------------------
app.include_router(auth.router)
app.include_router(concepts.router)
app.include_router(frameworks.router)
app.include_router(generation.router)
app.include_router(public.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
