"""
Emerald Purchase API - Main Application.

FastAPI application with CORS enabled for frontend communication.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import __version__

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create FastAPI application
app = FastAPI(
    title="Emerald Purchase API",
    description="REST API for browsing packages and pricing purchases",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS - Allow all origins for development
# TODO: Restrict origins once the storefront domain is fixed
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", tags=["Health"])
def health_check():
    """
    Health check endpoint.

    Returns the API status and version.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "service": "emerald-purchase-api"
    }


@app.get("/", tags=["Root"])
def root():
    """
    Root endpoint with API information.
    """
    return {
        "message": "Emerald Purchase API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


# Import and include routers
from api.routers import packages, quotes, purchases

app.include_router(packages.router, prefix="/api/v1", tags=["Packages"])
app.include_router(quotes.router, prefix="/api/v1", tags=["Quotes"])
app.include_router(purchases.router, prefix="/api/v1", tags=["Purchases"])
