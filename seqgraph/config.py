from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SEQGRAPH_")

    # Corpus settings
    corpus_dir: Path = Path("output/seq")
    reference_pattern: str = r"[A-Z][0-9]{6,}"
    progress_interval: int = 10_000

    # Artifact settings
    binary_output_path: Path = Path("output.bin")
    structured_output_path: Path = Path("output.graphmlz")
    malformed_label_policy: Literal["abort", "skip"] = "abort"
    brotli_quality: int = 11

    log_level: str = "INFO"  # Can be DEBUG, INFO, WARNING, ERROR, CRITICAL


settings = Settings()
