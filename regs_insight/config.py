
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    app_name: str = Field("Regs Insight", alias="APP_NAME")
    app_env: str = Field("dev", alias="APP_ENV")

    # local development defaults only
    db_host: str = Field("127.0.0.1", alias="DB_HOST")
    db_port: int = Field(3306, alias="DB_PORT")
    db_user: str = Field("root", alias="DB_USER")
    db_password: str = Field("", alias="DB_PASS")
    db_name: str = Field("regs_insight", alias="DB_NAME")
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    db_pool_size: int = Field(10, alias="DB_POOL_SIZE")
    db_connect_timeout: int = Field(10, alias="DB_CONNECT_TIMEOUT")

    port: int = Field(3000, alias="PORT")
    jwt_secret: str = Field("change_this_secret_in_env", alias="JWT_SECRET")
    access_token_expire_minutes: int = Field(12 * 60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    bcrypt_rounds: int = Field(10, alias="BCRYPT_ROUNDS")

    upload_dir: str = Field("uploads", alias="UPLOAD_DIR")
    public_dir: str = Field("public", alias="PUBLIC_DIR")

    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_format: str = Field("plain", alias="LOG_FORMAT")

    class Config:
        env_file = ".env"
        extra = "ignore"
        populate_by_name = True

    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return self._mysql_url(self.db_name).render_as_string(hide_password=False)

    def server_url(self) -> str:
        """URL of the MySQL server itself, without selecting a database."""
        return self._mysql_url(None).render_as_string(hide_password=False)

    def _mysql_url(self, database: str | None) -> URL:
        return URL.create(
            "mysql+aiomysql",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=database,
            query={"charset": "utf8mb4"},
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
