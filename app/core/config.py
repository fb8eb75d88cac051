from pydantic_settings import BaseSettings
from sqlalchemy.engine import make_url

class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: str = "development"  # "development" | "production"
    PROJECT_NAME: str = "Subscriptions API"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]

    # Database
    DATABASE_URL: str = "sqlite:///./dev.db"
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 5  # segundos esperando una conexion libre
    DB_POOL_RECYCLE: int = 3600  # vida maxima de una conexion

    # HTTP server
    HTTP_HOST: str = "0.0.0.0"
    HTTP_PORT: int = 8080
    SHUTDOWN_TIMEOUT: int = 10

    class Config:
        env_file = ".env"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    def log_summary(self) -> str:
        """Resumen de la configuracion para el log de arranque, sin la password de la DB"""
        url = make_url(self.DATABASE_URL).render_as_string(hide_password=True)
        return (
            f"env={self.ENVIRONMENT} "
            f"http={self.HTTP_HOST}:{self.HTTP_PORT} "
            f"database={url} "
            f"pool_size={self.DB_POOL_SIZE} max_overflow={self.DB_MAX_OVERFLOW} "
            f"pool_timeout={self.DB_POOL_TIMEOUT}s pool_recycle={self.DB_POOL_RECYCLE}s "
            f"shutdown_timeout={self.SHUTDOWN_TIMEOUT}s"
        )

settings = Settings()
