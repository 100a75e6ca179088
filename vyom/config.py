import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Configuration class for the Vyom wardrobe services"""

    # App Configuration
    APP_NAME: str = os.getenv("APP_NAME", "Vyom Platform")
    APP_VERSION: str = os.getenv("APP_VERSION", "2.0.0-microservices")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # JWT Configuration
    # Every service verifies tokens issued by the auth service, so the secret is shared
    SECRET_KEY: str = os.getenv("JWT_SECRET", "vyom_auth_secret")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 7 * 24 * 60))

    # Server Configuration
    HOST_URL: str = os.getenv("HOST_URL", "127.0.0.1")
    GATEWAY_PORT: int = int(os.getenv("GATEWAY_PORT", "3000"))
    AUTH_PORT: int = int(os.getenv("AUTH_PORT", "3001"))
    WARDROBE_PORT: int = int(os.getenv("WARDROBE_PORT", "3002"))
    OUTFIT_PORT: int = int(os.getenv("OUTFIT_PORT", "3003"))
    PROFILE_PORT: int = int(os.getenv("PROFILE_PORT", "3004"))

    # Downstream service URLs
    AUTH_SERVICE_URL: str = os.getenv("AUTH_SERVICE_URL", "http://localhost:3001")
    WARDROBE_SERVICE_URL: str = os.getenv("WARDROBE_SERVICE_URL", "http://localhost:3002")
    OUTFIT_SERVICE_URL: str = os.getenv("OUTFIT_SERVICE_URL", "http://localhost:3003")
    PROFILE_SERVICE_URL: str = os.getenv("PROFILE_SERVICE_URL", "http://localhost:3004")

    # Timeouts in seconds
    DOWNSTREAM_TIMEOUT: float = float(os.getenv("DOWNSTREAM_TIMEOUT", "10"))
    HEALTH_CHECK_TIMEOUT: float = float(os.getenv("HEALTH_CHECK_TIMEOUT", "5"))
    RETRY_AFTER_SECONDS: int = int(os.getenv("RETRY_AFTER_SECONDS", "30"))

    # Where the outfit service reads wardrobes from: "http" or "database"
    CATALOG_BACKEND: str = os.getenv("CATALOG_BACKEND", "http").lower()

    # Database Configuration
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./data/vyom.db")
    DATABASE_ECHO: bool = os.getenv("DATABASE_ECHO", "false").lower() in ("1", "true", "yes")

    # CORS Configuration
    CORS_ORIGINS: list = os.getenv("CORS_ORIGINS", "*").split(",")

    @property
    def services(self) -> dict:
        """Downstream services keyed by the name the gateway reports them under"""
        return {
            "auth": self.AUTH_SERVICE_URL,
            "wardrobe": self.WARDROBE_SERVICE_URL,
            "outfit": self.OUTFIT_SERVICE_URL,
            "profile": self.PROFILE_SERVICE_URL,
        }


# Create global config instance
config = Config()
