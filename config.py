import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./campus.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    JWT_EXPIRES_IN_SECONDS = int(data.get("JWT_EXPIRES_IN_SECONDS", 7 * 24 * 60 * 60))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    SESSION_CLEANUP_DAYS = int(data.get("SESSION_CLEANUP_DAYS", 30))
    REVOKED_SESSION_RETENTION_DAYS = int(data.get("REVOKED_SESSION_RETENTION_DAYS", 7))
