from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: str = "development"

    # Database
    DATABASE_URL: str
    DB_POOL_TIMEOUT_SECONDS: int = 5
    DB_STATEMENT_TIMEOUT_MS: int = 5000

    # JWT (access and refresh tokens are signed with independent secrets)
    ACCESS_TOKEN_SECRET: str
    REFRESH_TOKEN_SECRET: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 10

    # CORS
    CORS_ORIGIN: str = "http://localhost:5173"

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def cookie_secure(self) -> bool:
        """Auth cookies are only marked Secure when served over HTTPS in production."""
        return self.is_production

    def validate_required_secrets(self) -> list[str]:
        """Validate that critical secrets are set. Returns list of errors."""
        errors = []
        if not self.ACCESS_TOKEN_SECRET or len(self.ACCESS_TOKEN_SECRET) < 16:
            errors.append("ACCESS_TOKEN_SECRET must be set and at least 16 characters")
        if not self.REFRESH_TOKEN_SECRET or len(self.REFRESH_TOKEN_SECRET) < 16:
            errors.append("REFRESH_TOKEN_SECRET must be set and at least 16 characters")
        if self.ACCESS_TOKEN_SECRET == self.REFRESH_TOKEN_SECRET:
            errors.append("ACCESS_TOKEN_SECRET and REFRESH_TOKEN_SECRET must differ")
        if not self.DATABASE_URL:
            errors.append("DATABASE_URL must be set")
        return errors

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
