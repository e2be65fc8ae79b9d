from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_FAILURE_POLICIES = frozenset({"divert", "log"})
_ID_STRATEGIES = frozenset({"filename", "uuid"})


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    analysis_provider: str = "azure"
    analysis_endpoint: str = ""
    analysis_api_key: str = ""
    analysis_model_id: str = "prebuilt-layout"
    analysis_api_version: str = "2023-07-31"
    analysis_request_timeout_seconds: float = 30.0
    analysis_max_poll_attempts: int = 10
    analysis_poll_interval_ms: int = 2000

    pipeline_timeout_seconds: float = 300.0

    max_file_size_bytes: int = 50 * 1024 * 1024
    allowed_file_types: list[str] = ["pdf", "docx", "pptx", "xlsx", "txt", "html"]

    search_provider: str = "azure_search"
    search_endpoint: str = ""
    search_index_name: str = ""
    search_admin_key: str = ""
    search_api_version: str = "2023-11-01"
    index_id_strategy: str = "filename"

    storage_root: Path = Path("/app/storage")
    documents_container: str = "incoming"
    processed_container: str = "processed"
    failed_container: str = "failed"
    index_container: str = "indexed"

    queue_root: Path = Path("/app/queues")
    processing_queue_name: str = "document-processing-queue"
    max_job_attempts: int = 3
    job_poll_interval_seconds: int = 5

    analysis_failure_policy: str = "log"
    indexing_failure_policy: str = "divert"

    @field_validator("analysis_max_poll_attempts", "max_job_attempts")
    @classmethod
    def _at_least_one(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value

    @field_validator("analysis_poll_interval_ms", "max_file_size_bytes")
    @classmethod
    def _not_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must not be negative")
        return value

    @field_validator("analysis_failure_policy", "indexing_failure_policy")
    @classmethod
    def _known_failure_policy(cls, value: str) -> str:
        policy = value.lower()
        if policy not in _FAILURE_POLICIES:
            raise ValueError(f"must be one of {sorted(_FAILURE_POLICIES)}")
        return policy

    @field_validator("index_id_strategy")
    @classmethod
    def _known_id_strategy(cls, value: str) -> str:
        strategy = value.lower()
        if strategy not in _ID_STRATEGIES:
            raise ValueError(f"must be one of {sorted(_ID_STRATEGIES)}")
        return strategy

    @property
    def analysis_poll_interval_seconds(self) -> float:
        return self.analysis_poll_interval_ms / 1000
