import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from chain_registry.api.registry import router as registry_router
from chain_registry.core.dependencies import get_data_dir, load_registry_config
from chain_registry.data.registry import RELOAD_ERRORS, RegistryHandle, periodic_reload
from chain_registry.storage.json_source import JsonRegistrySource

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(handle: Optional[RegistryHandle] = None, refresh: bool = True) -> FastAPI:
    """
    Build the FastAPI application around a registry handle.

    Without an explicit handle, one is created for the local registry
    checkout named by CHAIN_REGISTRY_DATA_DIR.
    """
    if handle is None:
        handle = RegistryHandle(JsonRegistrySource(get_data_dir()), load_registry_config())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Build the initial snapshot and run the periodic rebuild task.
        """
        if not handle.is_loaded:
            try:
                await asyncio.to_thread(handle.reload)
            except RELOAD_ERRORS:
                # Endpoints answer 503 until a later reload succeeds.
                logger.error("Initial registry load failed", exc_info=True)

        refresh_task = asyncio.create_task(periodic_reload(handle)) if refresh else None
        try:
            yield
        finally:
            if refresh_task is not None:
                refresh_task.cancel()

    app = FastAPI(
        title="Chain Registry Cache",
        version="0.1.0",
        description="Read-only, in-memory view of a local chain registry checkout.",
        lifespan=lifespan,
    )
    app.state.registry = handle

    @app.get("/health")
    async def health() -> dict:
        """
        Lightweight health check endpoint.
        """
        return {"status": "ok", "loaded": handle.is_loaded}

    app.include_router(registry_router, prefix="/registry", tags=["registry"])
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "chain_registry.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
