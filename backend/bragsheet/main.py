"""
Brag Sheet Export Service — FastAPI Application

This is the entry point for the backend. It:
1. Creates the FastAPI app instance
2. Configures CORS (so the web frontend can talk to us)
3. Registers route handlers
4. Sets up logging and startup/shutdown lifecycle events

Run with:
    uvicorn bragsheet.main:app --reload --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bragsheet.config import settings
from bragsheet.routers import exports


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown logic.

    Code before 'yield' runs on startup.
    Code after 'yield' runs on shutdown.
    """
    # --- Startup ---
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    print("🚀 Starting Brag Sheet Export API...")

    yield  # App is running, handling requests

    # --- Shutdown ---
    print("👋 Shutting down...")


app = FastAPI(
    title="Brag Sheet Export API",
    description="Paginated PDF brag sheets in plain, professional and application formats",
    version="1.0.0",
    lifespan=lifespan,
)

# --- CORS Middleware ---
# Without this, the frontend can't call the API from a different origin
# because browsers block cross-origin requests by default.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "X-Page-Count"],
)

app.include_router(exports.router)


# --- Health Check Endpoints ---

@app.get("/", tags=["health"])
async def root():
    """Root endpoint — confirms the API is alive."""
    return {
        "service": "Brag Sheet Export",
        "status": "running",
        "version": "1.0.0",
    }


@app.get("/health", tags=["health"])
async def health_check():
    """Health check for load balancers.

    There is no database behind this service; the check confirms the
    PDF toolchain imports and reports the environment.
    """
    import reportlab

    return {
        "status": "healthy",
        "reportlab": reportlab.Version,
        "environment": settings.APP_ENV,
    }
