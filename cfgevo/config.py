"""
Command-line settings, read from the environment (and a .env file when present).
The library itself takes every parameter explicitly; only the CLI uses this.
"""
from __future__ import annotations

import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

from cfgevo.generators import DEFAULT_LIMIT


class Settings(BaseModel):
    limit: int = Field(default=DEFAULT_LIMIT, ge=1)
    codon_count: int = Field(default=100, ge=1)
    codon_max: int = Field(default=256, ge=1)
    log_level: str = "INFO"
    log_file: str = "cfgevo.log"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        # Without an explicit path, .env is looked up from the working directory upwards.
        load_dotenv(dotenv_path or find_dotenv(usecwd=True))
        values = {
            "limit": os.getenv("CFGEVO_LIMIT"),
            "codon_count": os.getenv("CFGEVO_CODON_COUNT"),
            "codon_max": os.getenv("CFGEVO_CODON_MAX"),
            "log_level": os.getenv("LOG_LEVEL"),
            "log_file": os.getenv("LOG_FILE"),
        }
        return cls(**{key: value for key, value in values.items() if value})
