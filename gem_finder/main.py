from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.middleware.cors import CORSMiddleware

from gem_finder.api.v1 import api_router
from gem_finder.api.v1.exception_handlers import register_exception_handlers
from gem_finder.core.config import settings
from gem_finder.db.init_db import init_db
from gem_finder.middlewares.logging_middleware import LoggingMiddleware
from gem_finder.middlewares.rate_limit import limiter
from gem_finder.utils.logger import configure_logging, get_logger
from gem_finder.utils.media_storage import media_store


# Configure logging to prevent duplicates
configure_logging()
logger = get_logger("main")


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_db()
    yield


app = FastAPI(title="Gem Finder API", lifespan=lifespan)

logger.info(f"CORS allowed origins: {settings.allowed_origins}")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# 1) SlowAPI Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# 2) Logging middleware
app.add_middleware(LoggingMiddleware)

# 3) Error responses as {"error": ...}
register_exception_handlers(app)

# Prometheus instrumentation
Instrumentator().instrument(app).expose(app)

# Uploaded images
app.mount(
    media_store.url_prefix,
    StaticFiles(directory=str(media_store.upload_dir)),
    name="uploads",
)

app.include_router(api_router, prefix="/api")


@app.get("/health")
async def health():
    return {"status": "healthy", "message": "Backend is running"}


@app.get("/")
async def root():
    return {"message": "Gem Finder API"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port)
