from pydantic import SecretStr
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables.

    Frozen after load: the token signing secret is read once at startup and
    rotating it requires a restart.
    """

    database_url: str  # e.g. mongodb://localhost:27017/autoforgx
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 5000
    debug: bool = False
    jwt_secret: SecretStr
    jwt_algorithm: str = "HS256"
    token_ttl_seconds: int = 3600  # 1 hour, fixed at issuance
    bcrypt_rounds: int = 12
    cors_origins: list[str] = []
    admin_api_key: SecretStr | None = None  # Catalog reseed is disabled when unset
    seed_catalog_on_start: bool = False  # Seeds default courses only into an empty catalog

    model_config = {
        "env_file": [".env"],
        "env_prefix": "AUTOFORGX_",
        "extra": "ignore",
        "frozen": True,
    }
