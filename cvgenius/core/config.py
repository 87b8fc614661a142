import os

# ✅ Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./cvgenius.db")

# ✅ Security (tokens are issued by the auth service, we only verify them)
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")

# ✅ OpenAI
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

# ✅ Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "logs")

# ✅ CORS
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

# ✅ ATS rate limiting (per user)
ATS_RATE_LIMIT = int(os.getenv("ATS_RATE_LIMIT", "10"))
ATS_RATE_WINDOW_SECONDS = int(os.getenv("ATS_RATE_WINDOW_SECONDS", "60"))


def as_dict() -> dict:
    """Current settings, for startup logging (sanitize before logging)."""
    return {
        "database_url": DATABASE_URL,
        "secret_key": SECRET_KEY,
        "algorithm": ALGORITHM,
        "openai_api_key": OPENAI_API_KEY,
        "openai_model": OPENAI_MODEL,
        "log_level": LOG_LEVEL,
        "cors_origins": CORS_ORIGINS,
        "ats_rate_limit": ATS_RATE_LIMIT,
        "ats_rate_window_seconds": ATS_RATE_WINDOW_SECONDS,
    }
