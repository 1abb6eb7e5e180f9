"""Application settings and configuration helpers."""
from functools import lru_cache
import os
from pydantic import BaseModel, Field
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseModel):
    """Runtime configuration loaded from environment variables."""

    database_url: str = Field(
        default="sqlite+aiosqlite:///./hrms.db", alias="DATABASE_URL"
    )
    secret_key: str = Field(default="change-me", alias="SECRET_KEY")
    access_token_expires_minutes: int = Field(default=60 * 24)
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Letterhead details printed on every generated document
    company_name: str = Field(default="ASN HR Consultancy & Services", alias="COMPANY_NAME")
    company_tagline: str = Field(default="Your Trusted HR Partner", alias="COMPANY_TAGLINE")
    company_address: str = Field(
        default="401, 4th Floor, Empire Arcade, Beside AV Manis, Sakore Nagar, Viman Nagar, Pune-411014",
        alias="COMPANY_ADDRESS",
    )
    company_website: str = Field(default="www.asnhrconsultancy.com", alias="COMPANY_WEBSITE")
    company_email: str = Field(default="info@asnhrconsultancy.com", alias="COMPANY_EMAIL")
    hr_name: str = Field(default="Nikita Nagargoje", alias="HR_NAME")
    hr_designation: str = Field(default="HR Manager", alias="HR_DESIGNATION")

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }


_ENV_FIELDS = {
    "database_url": "DATABASE_URL",
    "secret_key": "SECRET_KEY",
    "log_level": "LOG_LEVEL",
    "company_name": "COMPANY_NAME",
    "company_tagline": "COMPANY_TAGLINE",
    "company_address": "COMPANY_ADDRESS",
    "company_website": "COMPANY_WEBSITE",
    "company_email": "COMPANY_EMAIL",
    "hr_name": "HR_NAME",
    "hr_designation": "HR_DESIGNATION",
}


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings(
        **{
            field: os.getenv(env_name, Settings.model_fields[field].default)
            for field, env_name in _ENV_FIELDS.items()
        }
    )
