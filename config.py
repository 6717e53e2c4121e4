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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", False))
    API_WORKERS = data.get("API_WORKERS", 1)
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # PDF Generation
    PDF_CREATOR = data.get("PDF_CREATOR", "GST Invoice Generator")
    PDF_CURRENCY_PREFIX = data.get("PDF_CURRENCY_PREFIX", "Rs. ")  # Standard fonts have no Rupee glyph
    PDF_DEFAULT_TERMS = data.get("PDF_DEFAULT_TERMS", [
        "1. Payment is due within 30 days of invoice date.",
        "2. Interest @ 18% per annum will be charged on overdue amounts.",
        "3. All disputes subject to local jurisdiction only.",
        "4. Goods once sold will not be taken back.",
    ])
    PDF_FETCH_TIMEOUT_SECONDS = data.get("PDF_FETCH_TIMEOUT_SECONDS", 30.0)
