from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    log_level: str = "INFO"
    # JSON array of library exercises served to the ofp/sbu calculators.
    # Unset means an empty library: every exercise line is then custom.
    exercise_library_path: str | None = None

    # Warmup/cooldown used when an AI plan day leaves them out
    plan_default_warmup_km: float = 2.0
    plan_default_cooldown_km: float = 1.5

    cors_origins: list[str] = ["*"]

    # Allow empty env strings for optional fields
    @field_validator("exercise_library_path", mode="before")
    @classmethod
    def _empty_to_none(cls, v):
        if v in ("", None, "null", "None"):
            return None
        return v

    class Config:
        env_file = ".env"


settings = Settings()
