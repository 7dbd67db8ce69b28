import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from relief_api.api.inventory import router as inventory_router
from relief_api.api.severity import router as severity_router
from relief_inventory.config import get_settings
from relief_inventory.errors import ReliefInventoryError
from relief_inventory.logging_config import setup_logging

setup_logging(get_settings().LOG_LEVEL)
logger = logging.getLogger("relief_api")

app = FastAPI(
    title="Relief Inventory API",
    description="Severity-adjusted allocation for disaster relief stock",
    version="0.1.0"
)

app.include_router(inventory_router, prefix="/inventory")
app.include_router(severity_router, prefix="/severity")


@app.exception_handler(ReliefInventoryError)
def relief_inventory_error_handler(request: Request, exc: ReliefInventoryError):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Failed to fetch inventory feed",
            "message": exc.message,
            "code": exc.code,
        },
    )


@app.get("/")
def root():
    return {"status": "Relief Inventory API running"}
