import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .middleware import RateLimitMiddleware, RequestLoggingMiddleware
from .routes import router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = FastAPI(
    title="Document Tools",
    description=(
        "Text case transforms (lower, upper, initial caps, sentence, Chicago title case), "
        "link classification with liveness checks, and link/typography passes over HTML documents."
    ),
    version="2.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# middleware stack — last added runs first on request
app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logging.getLogger(__name__).error("Unhandled error on %s: %s", request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occurred.", "code": "internal_error"},
    )


app.include_router(router)
