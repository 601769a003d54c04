from datetime import date
from typing import List, Optional

from pydantic_settings import BaseSettings
from dotenv import load_dotenv
import os

load_dotenv()


def _split_list(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseSettings):
    """Defines and validates all environment variables for the application.

    Pydantic automatically reads variables from the environment or a .env file,
    validates their types, and provides default values if they are not set.
    List-valued settings are kept as comma-separated strings and exposed
    through the properties below.
    """
    BASELINE_HIRES: int = int(os.getenv("BASELINE_HIRES", 50))
    TRAINING_DELAY_SECONDS: float = float(os.getenv("TRAINING_DELAY_SECONDS", 1.5))
    SIMULATION_SEED: Optional[int] = int(os.environ["SIMULATION_SEED"]) if os.getenv("SIMULATION_SEED") else None

    EARLIEST_TRAINING_START: date = date.fromisoformat(os.getenv("EARLIEST_TRAINING_START", "2020-01-01"))
    PREDICTION_HORIZON_YEARS: int = int(os.getenv("PREDICTION_HORIZON_YEARS", 25))

    DEPARTMENTS: str = os.getenv("DEPARTMENTS", "Engineering,Marketing,Sales,HR,Operations")
    DEFAULT_DEPARTMENT: str = os.getenv("DEFAULT_DEPARTMENT", "Engineering")

    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "http://localhost:3000")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def department_list(self) -> List[str]:
        return _split_list(self.DEPARTMENTS)

    @property
    def cors_origin_list(self) -> List[str]:
        return _split_list(self.CORS_ORIGINS)

    class Config:
        env_file = ".env"
        env_file_encoding = 'utf-8'

settings = Settings()
