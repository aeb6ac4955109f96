# main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import logging

from config import HOST, PORT, CORS_ORIGINS
from dataset import sample_cache, DatasetUnavailableError
from middleware import SecurityHeadersMiddleware, RateLimitMiddleware
from services.sample_query import InvalidFilterError

logger = logging.getLogger(__name__)

app = FastAPI(title="Environmental Samples API")


# Added first = innermost. Security headers end up on every response,
# including 429s from the limiter and CORS preflights.
app.add_middleware(RateLimitMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET"],
    allow_headers=["*"],
)
app.add_middleware(SecurityHeadersMiddleware)

from routers import samples
app.include_router(samples.router)


@app.get("/")
def read_root():
    return {"message": "Environmental Samples API running"}


# ---------------------------
# ERROR MAPPING
# ---------------------------
@app.exception_handler(InvalidFilterError)
async def invalid_filter_handler(request: Request, exc: InvalidFilterError):
    return JSONResponse(status_code=400, content={"message": exc.message})


@app.exception_handler(DatasetUnavailableError)
async def dataset_unavailable_handler(request: Request, exc: DatasetUnavailableError):
    # Cause already logged by the loader; never echo paths to the client
    logger.error(f"❌ {request.url.path} failed: dataset unavailable")
    return JSONResponse(status_code=500, content={"message": "Error loading samples"})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(status_code=404, content={"message": "Route not found"})
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.on_event("startup")
async def on_startup():
    logger.info("🔄 Loading samples dataset...")
    try:
        sample_cache.load()
    except DatasetUnavailableError:
        # Keep serving; /api/samples answers 500 until the file is fixed
        logger.warning("⚠ Samples dataset not available at startup")
        return
    logger.info("🚀 Startup initialization complete.")


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host=HOST, port=PORT)
