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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./invoicing.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", False))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))

    # Identity is resolved by an upstream gateway; AUTH_DISABLED pins a dev tenant
    AUTH_DISABLED = bool(data.get("AUTH_DISABLED", False))
    DEV_TENANT_ID = data.get("DEV_TENANT_ID", "tenant_dev")
    TENANT_HEADER = data.get("TENANT_HEADER", "X-Tenant-ID")
    EMAIL_HEADER = data.get("EMAIL_HEADER", "X-User-Email")

    APP_BASE_URL = data.get("APP_BASE_URL", "http://localhost:3000")
    DEFAULT_CURRENCY = data.get("DEFAULT_CURRENCY", "USD")

    # Mail delivery
    MAIL_API_URL = data.get("MAIL_API_URL", None)  # None = log only
    MAIL_API_KEY = data.get("MAIL_API_KEY", "")
    MAIL_FROM_ADDRESS = data.get("MAIL_FROM_ADDRESS", "invoices@localhost")
    MAIL_TIMEOUT_SECONDS = data.get("MAIL_TIMEOUT_SECONDS", 10.0)
    MAIL_MAX_RETRIES = data.get("MAIL_MAX_RETRIES", 3)
    MAIL_INITIAL_DELAY_SECONDS = data.get("MAIL_INITIAL_DELAY_SECONDS", 1.0)
    MAIL_MAX_DELAY_SECONDS = data.get("MAIL_MAX_DELAY_SECONDS", 10.0)
    MAIL_BACKOFF_FACTOR = data.get("MAIL_BACKOFF_FACTOR", 2.0)

    # Invoiced-task reconciliation
    RECONCILIATION_ENABLED = bool(data.get("RECONCILIATION_ENABLED", True))
    RECONCILIATION_INTERVAL_SECONDS = data.get("RECONCILIATION_INTERVAL_SECONDS", 3600)  # Hourly
    RECONCILIATION_REPAIR = bool(data.get("RECONCILIATION_REPAIR", False))
