from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import __version__
from .api import health, payments
from .config import settings
from .container import get_container
from .logging_config import setup_logging
from .middleware.logging_middleware import RequestLoggingMiddleware


@asynccontextmanager
async def lifespan(_app: FastAPI):
    setup_logging()
    yield
    await get_container().aclose()


# Create FastAPI app
app = FastAPI(
    title="Paybot API",
    description="Turns chat payment commands into signable transaction requests",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(payments.router, tags=["Payments"])


@app.get("/")
async def root():
    """Root endpoint with basic info"""
    return {
        "name": "Paybot API",
        "version": __version__,
        "chain_id": settings.chain_id,
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "paybot.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )
