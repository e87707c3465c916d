"""
Menu Proxy Backend API
FastAPI application that forwards menu PDFs and images to Claude for extraction.
"""

import logging
import os

from fastapi import FastAPI

from menu_proxy.routers import proxy

# Configure logging to output to console
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Menu Proxy API",
    description="Forwards restaurant menu PDFs and images to the Anthropic Messages API",
    version="0.1.0",
)

# CORS headers are set by the proxy router itself, on every response it sends.
app.include_router(proxy.router, prefix="/api/anthropic-proxy", tags=["proxy"])


@app.get("/")
async def root():
    return {"message": "Menu Proxy API", "version": "0.1.0"}


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Menu Proxy API listening on http://{host}:{port}")
    uvicorn.run("menu_proxy.main:app", host=host, port=port)
