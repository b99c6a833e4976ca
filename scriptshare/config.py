"""Application configuration"""

from dataclasses import dataclass, field
from functools import lru_cache
from os import getenv
from pathlib import Path


def _getenv_list(name: str) -> list[str]:
    return [item.strip() for item in getenv(name, "").split(",") if item.strip()]


@dataclass
class Config:
    secret_key: str | None = field(default=getenv("SCRIPTSHARE_SECRET_KEY", ""))

    app_name: str = "scriptshare"
    app_version: str = "0.1.0"

    # bypasses captcha validation and sitemap pings, for non-production use
    debug: bool = field(
        default=getenv("SCRIPTSHARE_DEBUG", "").lower() in ("1", "true", "yes")
    )

    recaptcha_private_key: str | None = field(
        default=getenv("SCRIPTSHARE_RECAPTCHA_PRIVATE_KEY", "")
    )
    recaptcha_verify_url: str = field(
        default=getenv(
            "SCRIPTSHARE_RECAPTCHA_VERIFY_URL",
            "https://www.google.com/recaptcha/api/siteverify",
        )
    )

    # emails of users allowed to delete scripts
    admin_users: list[str] = field(
        default_factory=lambda: _getenv_list("SCRIPTSHARE_ADMIN_USERS")
    )

    site_url: str = field(default=getenv("SCRIPTSHARE_SITE_URL", "http://localhost:8000"))
    ping_urls: dict[str, str] = field(
        default_factory=lambda: {
            "google": "https://www.google.com/ping?sitemap={sitemap}",
            "bing": "https://www.bing.com/ping?sitemap={sitemap}",
        }
    )

    permalink_max_attempts: int = 10

    # Optional database URL for Postgres or other databases
    database_url_env: str | None = field(
        default=getenv("SCRIPTSHARE_DATABASE_URL", None)
    )

    @property
    def sitemap_url(self) -> str:
        return f"{self.site_url.rstrip('/')}/sitemap.xml"

    @property
    def database_path(self) -> Path:
        return Path("./data/") / Path(f"{self.app_name}.db")

    @property
    def database_url(self) -> str:
        # Use provided DATABASE_URL if available, else fall back to SQLite file
        if self.database_url_env:
            return self.database_url_env
        return f"sqlite:///{self.database_path}"


@lru_cache
def get_config() -> Config:
    return Config()
