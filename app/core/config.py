"""
Application configuration management using Pydantic Settings
Handles all environment variables and service settings
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List
from functools import lru_cache

class Settings(BaseSettings):
    """Main application settings"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Application Settings
    APP_NAME: str = "Wishlist Service"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 3002
    WORKERS: int = 4

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./wishlist.db"
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 40
    DATABASE_POOL_TIMEOUT: int = 30
    DATABASE_ECHO: bool = False

    # Upstream RPC services
    PRODUCT_SERVICE_URL: str = "http://localhost:50051"
    PRODUCT_RPC_PATH: str = "/product.ProductService/GetProduct"
    CART_SERVICE_URL: str = "http://localhost:50052"
    CART_RPC_PATH: str = "/cart.CartService/AddToCart"
    RPC_TIMEOUT_SECONDS: float = 10.0

    # In-process cache
    CACHE_TTL_SECONDS: float = 300.0  # 5 minutes
    CACHE_MAX_ENTRIES: Optional[int] = None  # unbounded unless set

    # Business rules
    WISHLIST_MAX_ITEMS: int = 100
    MIN_QUANTITY_PER_ITEM: int = 1
    MAX_QUANTITY_PER_ITEM: int = 99

    # CORS Configuration
    ALLOWED_HOSTS: List[str] = ["*"]
    CORS_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: List[str] = ["*"]
    CORS_ALLOW_HEADERS: List[str] = ["*"]

    # Identity header set by the authenticating gateway
    USER_ID_HEADER: str = "X-User-Id"

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: str = "60/minute"
    RATE_LIMIT_BURST: str = "10 per 10 seconds"
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    # Logging / Monitoring
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None
    LOG_MAX_BYTES: int = 10 * 1024 * 1024  # 10MB
    LOG_BACKUP_COUNT: int = 5
    PROMETHEUS_ENABLED: bool = True

    @property
    def database_url_async(self) -> str:
        """Convert sync database URL to async"""
        if self.DATABASE_URL.startswith("postgresql://"):
            return self.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://")
        elif self.DATABASE_URL.startswith("sqlite://"):
            return self.DATABASE_URL.replace("sqlite://", "sqlite+aiosqlite://")
        return self.DATABASE_URL

@lru_cache()
def get_settings() -> Settings:
    """
    Create cached settings instance
    This ensures settings are loaded only once
    """
    return Settings()

# Global settings instance
settings = get_settings()
