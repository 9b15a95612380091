from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 3000

    DATABASE_URL: str = "sqlite:///./database.sqlite"

    # JWT signing. No expiry unless TOKEN_EXPIRE_MINUTES is set.
    jwt_secret: str = "your-secret-key"
    jwt_algorithm: str = "HS256"
    token_expire_minutes: int | None = None

    cors_origins: list[str] = ["*"]

    log_level: str = "INFO"
    log_dir: str | None = None

    class Config:
        env_file = ".env"
        case_sensitive = False


def get_settings() -> Settings:
    return Settings()
