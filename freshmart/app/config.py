import os


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")

    # REST backend the storefront and dashboard talk to
    API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8080")
    API_TIMEOUT = float(os.getenv("API_TIMEOUT", "10"))

    # Where admin logins are sent after a successful login
    ADMIN_URL = os.getenv("ADMIN_URL", "/admin/")

    LOW_STOCK_THRESHOLD = int(os.getenv("LOW_STOCK_THRESHOLD", "10"))
    RECENT_ORDERS_LIMIT = int(os.getenv("RECENT_ORDERS_LIMIT", "5"))

    # UI delays (seconds)
    ALERT_DISMISS_SECONDS = float(os.getenv("ALERT_DISMISS_SECONDS", "5"))
    REGISTER_REDIRECT_SECONDS = float(os.getenv("REGISTER_REDIRECT_SECONDS", "2"))
    CART_MESSAGE_SECONDS = float(os.getenv("CART_MESSAGE_SECONDS", "3"))
    CART_COMMIT_SECONDS = float(os.getenv("CART_COMMIT_SECONDS", "1"))

    APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT = int(os.getenv("APP_PORT", "4200"))

    # httpx transport override (tests plug an httpx.MockTransport in here)
    API_TRANSPORT = None
