import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from data_hunter.api.routes import get_orchestrator, router
from data_hunter.core.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Close the HTTP sessions held by the pipeline
    if get_orchestrator.cache_info().currsize:
        get_orchestrator().close()


# Create FastAPI application
app = FastAPI(
    title="Master Data Hunter API",
    version="1.0.0",
    description="Finds product images and extracts nutrition facts for barcodes across European markets",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "data_hunter.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
