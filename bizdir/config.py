from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    store_backend: str = "mongo"
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "business_directory"
    mongodb_timeout_ms: int = 5000

    upload_dir: str = "uploads/submissions"
    # Public prefix written into documents; the app serves files at /uploads/submissions.
    upload_base_url: str = "/uploads/submissions"
    max_upload_mb: int = 10

    submission_cooldown_seconds: int = 30
    duplicate_batch_size: int = 10
    max_batch_ids: int = 50
    check_duplicates_on_intake: bool = True

    log_level: str = "INFO"
