import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from holiday_api.config import API_PREFIX, CORS_ALLOWED_ORIGINS, LOG_LEVEL, LOG_TO_FILE
from holiday_api.db import client, get_holiday_store
from holiday_api.errors import UNHANDLED_ERROR_MESSAGE, HolidayAPIError
from holiday_api.routes import holidays
from holiday_api.utils.cors import EdgeCORS
from holiday_api.utils.dates import utc_now
from holiday_api.utils.logging_config import setup_logging

# Configure logging (file + console) on import
setup_logging(level=LOG_LEVEL, log_to_file=LOG_TO_FILE)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await get_holiday_store().create_indexes()
    logger.info("Application started")
    yield
    client.close()
    logger.info("Application shutdown")


app = FastAPI(title="Holiday API", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every HTTP request: method, path, status, duration."""
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s %s %.2fms",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


# Registered after log_requests so it runs first (outermost) and answers preflights
app.middleware("http")(EdgeCORS(CORS_ALLOWED_ORIGINS, path_prefix=API_PREFIX))


@app.exception_handler(HolidayAPIError)
async def holiday_error_handler(request: Request, exc: HolidayAPIError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (cause: %r)", request.method, request.url.path, exc.message, exc.__cause__)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": UNHANDLED_ERROR_MESSAGE},
    )


@app.get("/")
async def root():
    return {"message": "Holiday API is running"}


@app.get("/health")
async def health_check():
    return {"status": "healthy", "timestamp": utc_now().isoformat()}


app.include_router(holidays.router, prefix=API_PREFIX)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
