# storefront/core/config.py
import os
from dotenv import load_dotenv

load_dotenv()

LOGOUT_MODES = ("session", "auth")


def _env_bool(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # --- API Info ---
    API_TITLE: str = "EcoAgua Storefront API"
    API_DESCRIPTION: str = "Storefront backend for browsing products, keeping a session cart, user accounts and simulated checkout."
    API_VERSION: str = "1.0.0"

    # --- Server Configuration ---
    PORT: int = int(os.getenv("PORT", "3000"))
    HOST: str = os.getenv("HOST", "0.0.0.0")

    # --- Database ---
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")
    SEED_PRODUCTS: bool = _env_bool("SEED_PRODUCTS", "0")

    # --- Sessions ---
    SESSION_SECRET_KEY: str = os.getenv("SESSION_SECRET_KEY", "mySecret")
    SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "ecoagua_sid")
    SESSION_TTL_SECONDS: int = int(os.getenv("SESSION_TTL_SECONDS", str(60 * 60 * 24)))
    SESSION_HTTPS_ONLY: bool = os.getenv("ENVIRONMENT") == "production"

    # "session" destroys the whole session (cart included), "auth" only forgets the user
    LOGOUT_MODE: str = os.getenv("LOGOUT_MODE", "session")
    CLEAR_CART_ON_CHECKOUT: bool = _env_bool("CLEAR_CART_ON_CHECKOUT", "0")

    # --- Accounts ---
    RATE_LIMIT_ENABLED: bool = _env_bool("RATE_LIMIT_ENABLED", "1")
    RATE_LIMIT_LOGIN: str = os.getenv("RATE_LIMIT_LOGIN", "30/minute")
    RATE_LIMIT_REGISTER: str = os.getenv("RATE_LIMIT_REGISTER", "20/hour")
    PASSWORD_HASH_ROUNDS: int = int(os.getenv("PASSWORD_HASH_ROUNDS", "8"))

    # --- Catalogue ---
    PRODUCT_LIST_LIMIT: int = int(os.getenv("PRODUCT_LIST_LIMIT", "10"))

    # --- Site copy ---
    BRAND: str = "EcoAgua"

    def validate(self) -> None:
        """Reject values that would otherwise only fail once a request hits them"""
        if self.LOGOUT_MODE not in LOGOUT_MODES:
            raise ValueError(
                f"LOGOUT_MODE must be one of {', '.join(LOGOUT_MODES)}, got {self.LOGOUT_MODE!r}"
            )


settings = Settings()
