# Main application file



import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from pos_api.database import engine, Base
from pos_api.core.rate_limiter import limiter
from pos_api.core.config import settings
from pos_api.core.exceptions import (
    InsufficientStockError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from pos_api.routers import (
    auth,
    products,
    inventory,
    sales,
    internal_admin,
)


# LOGGING CONFIGURATION

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s | %(levelname)s | %(message)s",
)

logger = logging.getLogger("pos_api")


# APP INIT

app = FastAPI(
    title="Point of Sale API",
    description="Back end for cashier stations: catalog, stock and atomic sale recording",
    version="1.0.0",
)


# DATABASE

Base.metadata.create_all(bind=engine)


# RATE LIMITING

app.state.limiter = limiter
app.add_exception_handler(
    RateLimitExceeded,
    _rate_limit_exceeded_handler
)


# SALE ERROR MAPPING

ERROR_STATUS = {
    ValidationError: 422,
    InsufficientStockError: 409,
    NotFoundError: 404,
    PersistenceError: 503,
}


def _sale_error_handler(status_code: int):
    async def handler(request: Request, exc):
        return JSONResponse(status_code=status_code, content=exc.to_dict())
    return handler


for error_class, status_code in ERROR_STATUS.items():
    app.add_exception_handler(error_class, _sale_error_handler(status_code))


# REQUEST LOGGING MIDDLEWARE

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    duration = round((time.time() - start_time) * 1000, 2)

    logger.info(
        f"{request.method} {request.url.path} "
        f"Status: {response.status_code} "
        f"Time: {duration}ms"
    )

    return response


# ROUTERS

app.include_router(auth.router)
app.include_router(products.router)
app.include_router(inventory.router)
app.include_router(sales.router)
app.include_router(internal_admin.router)



# ROOT

@app.get("/")
def root():
    logger.info("Health check endpoint called")
    return {"message": "Point of Sale API is running"}
