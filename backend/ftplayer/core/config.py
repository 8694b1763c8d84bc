from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    database_url: str = "sqlite:///./ftplayer.db"
    secret_key: str
    jwt_secret_key: Optional[str] = None
    jwt_algorithm: str = "HS256"
    api_host: str = "0.0.0.0"
    api_port: int = 5000
    log_level: str = "INFO"

    # Security
    access_token_expire_days: int = 7
    bcrypt_rounds: int = 10

    # Content sources
    ping_timeout_seconds: float = 5.0

    class Config:
        env_file = ".env"
        case_sensitive = False

    def model_post_init(self, __context):
        if not self.jwt_secret_key:
            self.jwt_secret_key = self.secret_key


settings = Settings()
