import os
import string
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./shortlink.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    LINKS_PREFIX = data.get("LINKS_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    TOKEN_TTL_MINUTES = int(data.get("TOKEN_TTL_MINUTES", 60))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    LINK_KEY_LENGTH = int(data.get("LINK_KEY_LENGTH", 8))
    LINK_KEY_ALPHABET = data.get(
        "LINK_KEY_ALPHABET",
        string.digits + string.ascii_lowercase + string.ascii_uppercase,
    )
    LINK_KEY_MAX_ATTEMPTS = int(data.get("LINK_KEY_MAX_ATTEMPTS", 10))
    RESERVED_LINK_KEYS = data.get(
        "RESERVED_LINK_KEYS",
        ["api", "docs", "redoc", "openapi.json", "health", "favicon.ico", "robots.txt"],
    )
    ACCOUNT_ID_PATTERN = data.get("ACCOUNT_ID_PATTERN", r"^[a-zA-Z0-9_\-]+$")
    MIN_PASSWORD_LENGTH = int(data.get("MIN_PASSWORD_LENGTH", 8))
