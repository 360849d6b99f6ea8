"""FastAPI main application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docportal.api import documents, stats
from docportal.config import settings
from docportal.logging_config import setup_logging

setup_logging()

app = FastAPI(title="Document Portal Statistics", version="1.0.0")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(stats.router, prefix="/api/admin", tags=["admin"])
app.include_router(documents.router, prefix="/api/documents", tags=["documents"])


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "ok"}
