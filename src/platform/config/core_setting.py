from pathlib import Path
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Study Space Seat Booking'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # add the dashboard URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    # Seat layout (physical chart: 14 rows, 3-seat left bank, 4-seat right bank)
    LAYOUT_ROWS: int = 14
    LAYOUT_LEFT_WIDTH: int = 3
    LAYOUT_RIGHT_WIDTH: int = 4
    SEAT_ID_PREFIX: str = 'S-'

    # Facility clock, used to decide occupied vs pre-booked
    FACILITY_TIMEZONE: str = 'Asia/Kolkata'

    # Booking flow timeouts (seconds)
    AVAILABILITY_CHECK_TIMEOUT_SECONDS: float = 5.0
    SUBMISSION_TIMEOUT_SECONDS: float = 5.0

    # Simulated round trip of the booking backend (seconds)
    SIMULATED_BACKEND_LATENCY_SECONDS: float = 0.0

    # SSE
    SSE_STREAM_BUFFER_SIZE: int = 10


settings = Settings()  # type: ignore
