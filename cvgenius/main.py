import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# ✅ Import All API Routes
from cvgenius.api.routes import ai, ats, health, plans, resumes, usage

from cvgenius.core import config
from cvgenius.core.logging_config import setup_logging, sanitize_log_data
from cvgenius.core.rate_limit import RateLimiter
from cvgenius.db.init_db import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(config.LOG_LEVEL, config.LOG_DIR)
    logger.info(f"Starting CVGenius API with settings {sanitize_log_data(config.as_dict())}")
    init_db()
    logger.info(f"AI suggestions: {'ready' if config.OPENAI_API_KEY else 'not configured'}")
    yield


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="CVGenius API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)

# Per-user limiter for the scoring endpoint
app.state.rate_limiter = RateLimiter(
    max_requests=config.ATS_RATE_LIMIT,
    window_seconds=config.ATS_RATE_WINDOW_SECONDS,
)


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(health.router)
app.include_router(plans.router)
app.include_router(usage.router)
app.include_router(resumes.router)
app.include_router(ats.router)
app.include_router(ai.router)


# ============================================
# ✅ ERROR HANDLING
# ============================================

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/")
def root():
    return {"status": "CVGenius API running"}
