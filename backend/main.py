"""NFS Export Manager: FastAPI backend entry point."""

import logging
import os
import shutil

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from exceptions import NFSError
from routes import exports

logger = logging.getLogger(__name__)

app = FastAPI(
    title="NFS Export Manager",
    version="0.1.0",
    description="Export and unexport NFS shares through exportfs",
)

# Browser frontends allowed to call the API, comma-separated
cors_origins = os.environ.get("CORS_ORIGINS", "http://localhost:5173").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Exception handlers ---


@app.exception_handler(NFSError)
async def nfs_error_handler(request: Request, exc: NFSError) -> JSONResponse:
    """Map exportfs failures to HTTP responses."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
    )


# --- Lifecycle ---


@app.on_event("startup")
async def startup() -> None:
    """Warn early if exportfs is missing; requests would fail with 404s."""
    exportfs_path = shutil.which("exportfs")
    if not exportfs_path:
        logger.critical(
            "Required command not found: exportfs. "
            "Install NFS server tools: apt install nfs-kernel-server"
        )
        return
    logger.info("exportfs found: %s", exportfs_path)


# --- Mount routers ---

app.include_router(exports.router, prefix="/api/exports", tags=["exports"])


# --- Health check ---


@app.get("/api/health")
async def health() -> dict:
    """Health check: verifies exportfs and sudo are available."""
    exportfs_available = shutil.which("exportfs") is not None
    sudo_available = shutil.which("sudo") is not None

    return {
        "status": "ok" if exportfs_available else "degraded",
        "exportfs": exportfs_available,
        "sudo": sudo_available,
    }
