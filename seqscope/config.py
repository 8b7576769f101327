import logging
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # Pairwise scoring
    match_score: int = 1
    mismatch_score: int = -1
    gap_penalty: int = -2

    # Cost guards
    pairwise_warn_cells: int = 25_000_000
    max_alignment_residues: int = 500_000  # 0 disables the guard

    # Analysis defaults
    min_orf_length: int = 100
    gc_window_size: int = 100
    gc_step: int = 10
    dotplot_window_size: int = 10
    dotplot_threshold: float = 70.0

    # Background worker
    worker_start_method: Optional[str] = None
    worker_poll_interval: float = 0.1
    normalize_sequences: bool = True

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="SEQSCOPE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""
    settings = Settings()
    logger.debug("Loaded settings: %s", settings.model_dump())
    return settings
