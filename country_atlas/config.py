import json
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

PACKAGE_DATA_DIR = Path(__file__).resolve().parent / "data"


class Settings(BaseSettings):
    data_dir: Path = PACKAGE_DATA_DIR
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]
    source_url: str = "https://raw.githubusercontent.com/mledoze/countries/master/countries.json"
    flags_url: str = "https://raw.githubusercontent.com/lipis/flag-icons/main/flags/4x3/"
    http_timeout: float = 30.0
    rate_limit: str = "60/minute"
    log_level: str = "INFO"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            # Accept JSON array or comma-separated string
            v = v.strip()
            if v.startswith("["):
                return json.loads(v)
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()

    model_config = {
        "env_prefix": "ATLAS_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
