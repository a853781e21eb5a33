# storefront/config.py
import os
from dotenv import load_dotenv
from sqlalchemy.engine import URL

BASE_DIR = os.path.abspath(os.path.dirname(__file__))
load_dotenv(os.path.join(BASE_DIR, ".env"))

INSTANCE_DIR = os.path.join(BASE_DIR, "instance")


def _env(key: str, default=None):
    v = os.getenv(key)
    return v if v not in (None, "", "None") else default


def _env_bool(key: str, default: bool = False) -> bool:
    v = os.getenv(key)
    if v in (None, "", "None"):
        return default
    return str(v).strip().lower() in ("1", "true", "t", "yes", "y", "on")


def _env_list(key: str, default: str = "") -> list[str]:
    raw = _env(key, default) or ""
    return [part.strip() for part in raw.split(",") if part.strip()]


def _resolve_database_uri() -> str:
    """
    DATABASE_URL wins; otherwise DB_HOST/DB_PORT/DB_USER/DB_PASSWORD/DB_NAME
    build a PostgreSQL URL; otherwise fall back to SQLite in instance/.
    """
    db_url = _env("DATABASE_URL")
    if db_url:
        if db_url.startswith("sqlite:///") and db_url != "sqlite:///:memory:":
            raw_path = db_url.replace("sqlite:///", "", 1)
            if not os.path.isabs(raw_path):
                raw_path = os.path.join(BASE_DIR, raw_path)
            db_path = os.path.normpath(raw_path)
            os.makedirs(os.path.dirname(db_path), exist_ok=True)
            return "sqlite:///" + db_path.replace("\\", "/")
        return db_url

    host = _env("DB_HOST")
    if host:
        return URL.create(
            "postgresql+psycopg2",
            username=_env("DB_USER", "storefront"),
            password=_env("DB_PASSWORD"),
            host=host,
            port=int(_env("DB_PORT", 5432)),
            database=_env("DB_NAME", "storefront"),
        ).render_as_string(hide_password=False)

    os.makedirs(INSTANCE_DIR, exist_ok=True)
    db_path = os.path.join(INSTANCE_DIR, "database.db")
    return "sqlite:///" + db_path.replace("\\", "/")


def _engine_options(uri: str) -> dict:
    # SQLite uses its own pool; sizing only applies to server databases
    if uri.startswith("sqlite"):
        return {}
    return {
        "pool_size": int(_env("DB_POOL_SIZE", 5)),
        "pool_pre_ping": True,
    }


class Config:
    SECRET_KEY = _env("SECRET_KEY", "dev-please-change-me")

    SQLALCHEMY_DATABASE_URI = _resolve_database_uri()
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options(SQLALCHEMY_DATABASE_URI)
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JSON_AS_ASCII = False

    AUTH_TOKEN_SALT = _env("AUTH_TOKEN_SALT", "storefront-auth")
    AUTH_TOKEN_MAX_AGE = int(_env("AUTH_TOKEN_MAX_AGE", 60 * 60 * 24 * 30))
    BCRYPT_LOG_ROUNDS = int(_env("BCRYPT_LOG_ROUNDS", 12))

    CORS_ORIGINS = _env_list("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")

    LOG_LEVEL = _env("LOG_LEVEL", "INFO")
    SQLALCHEMY_ECHO = _env_bool("SQLALCHEMY_ECHO", False)


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    SQLALCHEMY_ECHO = False
    BCRYPT_LOG_ROUNDS = 4
    LOG_LEVEL = "WARNING"
