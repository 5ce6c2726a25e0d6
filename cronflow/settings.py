"""Runtime configuration for CronFlow.

Values come from the environment (optionally a local .env file).
"""

import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from cronflow.models.constants import NEXT_OCCURRENCES_COUNT

load_dotenv()


class Settings(BaseModel):
    occurrence_count: int = Field(NEXT_OCCURRENCES_COUNT, ge=1, le=50)
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False


def get_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from an environment mapping (defaults to os.environ).

    Separated from module import so tests can pass a plain dict.
    """
    env = os.environ if environ is None else environ
    return Settings(
        occurrence_count=int(env.get("CRONFLOW_OCCURRENCE_COUNT", str(NEXT_OCCURRENCES_COUNT))),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
        host=env.get("HOST", "0.0.0.0"),
        port=int(env.get("PORT", "8000")),
        debug=env.get("DEBUG", "False").lower() == "true",
    )
