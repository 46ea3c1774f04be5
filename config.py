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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./clinic.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", 1))
    SEED_PLANS = bool(data.get("SEED_PLANS", 1))
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_EXPIRE_MINUTES = int(data.get("JWT_EXPIRE_MINUTES", 60))
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
    VERIFICATION_CODE_TTL_MINUTES = int(data.get("VERIFICATION_CODE_TTL_MINUTES", 10))
    RAZORPAY_KEY_ID = data.get("RAZORPAY_KEY_ID", "")
    RAZORPAY_KEY_SECRET = data.get("RAZORPAY_KEY_SECRET", "")
    RAZORPAY_BASE_URL = data.get("RAZORPAY_BASE_URL", "https://api.razorpay.com/v1")
    PAYMENT_PROVIDER_TIMEOUT_SECONDS = float(
        data.get("PAYMENT_PROVIDER_TIMEOUT_SECONDS", 5)
    )
