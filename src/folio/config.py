"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "FOLIO_"


class Settings(BaseModel):
    app_name:          str = "folio"
    mode:              str = Field(default="dev", description="'prod' reads content from blob storage; anything else from disk")
    content_dir:       str = Field(default="content", description="Local content root (site.json, profile.json, blog/)")
    data_blob_prefix:  str = Field(default="data/",  description="Blob prefix for JSON content")
    posts_blob_prefix: str = Field(default="posts/", description="Blob prefix for markdown posts")
    blob_token:        str = ""
    blob_api_url:      str = "https://blob.vercel-storage.com"

    smtp_host:   str = ""
    smtp_port:   int = Field(default=587, ge=1, le=65535, description="465 = implicit TLS, anything else = STARTTLS")
    smtp_user:   str = ""
    smtp_pass:   str = ""
    contact_from: str = ""
    contact_to:   str = ""
    calendly_url: str = ""
    mail_await_delivery: bool = Field(default=False, description="Send mail before responding instead of in the background")

    recaptcha_secret_key: str = ""
    recaptcha_site_key:   str = ""
    recaptcha_min_score:  float = Field(default=0.5, ge=0.0, le=1.0)

    github_username: str = "Ghaith00"
    log_level:       str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    model_config = {"frozen": True}

    @field_validator("data_blob_prefix", "posts_blob_prefix")
    @classmethod
    def _strip_leading_slash(cls, v: str) -> str:
        return v.lstrip("/")

    @property
    def use_blob(self) -> bool:
        return self.mode.lower() == "prod"

    @property
    def sender(self) -> str:
        return self.contact_from or f'"Contact" <{self.smtp_user}>'

    def public(self) -> dict[str, Any]:
        """Settings safe to print or expose; secrets are masked."""
        secret = {"blob_token", "smtp_pass", "recaptcha_secret_key"}
        return {k: ("***" if k in secret and v else v) for k, v in self.model_dump().items()}


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then FOLIO_<FIELD> env vars, then non-None overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
