"""
Web Configuration - Centralized settings management
"""
import os
from pathlib import Path

from pydantic import BaseModel
from dotenv import load_dotenv

# Load backend/.env when present
_backend_env = Path(__file__).parent.parent.parent / ".env"
if _backend_env.exists():
    load_dotenv(_backend_env)

DEFAULT_OFFLINE_FILE_URL_TEMPLATE = "offline://court-lists/{court_list_type}/{court_list_id}.pdf"


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class AppConfig(BaseModel):
    """Application configuration with environment variable support"""

    # Server settings
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Paths
    project_root: Path = Path(__file__).parent.parent.parent.parent
    data_dir: Path = project_root / "data"
    database_path: Path = data_dir / "court_list_publishing.db"

    # Downstream services (empty base URL disables the client)
    common_platform_base_url: str = ""
    publication_hub_url: str = ""
    publication_hub_token: str = ""
    document_generator_base_url: str = ""
    http_timeout: float = 30.0
    http_retry_attempts: int = 3

    # PDF storage
    blob_backend: str = "local"  # "local" or "azure"
    blob_local_dir: Path = data_dir / "pdfs"
    blob_public_base_url: str = ""
    azure_storage_connection_string: str = ""
    azure_storage_container: str = "court-lists"
    sas_expiry_minutes: int = 120

    # Pipeline policy
    offline_file_url_template: str = DEFAULT_OFFLINE_FILE_URL_TEMPLATE
    pdf_failure_marks_failed: bool = False

    # Rate limiting
    rate_limit: str = "60/minute"
    rate_limit_enabled: bool = True

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load configuration from environment variables"""
        defaults = cls()
        return cls(
            host=os.getenv("HOST", defaults.host),
            port=int(os.getenv("PORT", str(defaults.port))),
            debug=_flag("DEBUG", "0"),
            database_path=Path(os.getenv("DATABASE_PATH", str(defaults.database_path))),
            common_platform_base_url=os.getenv("COMMON_PLATFORM_BASE_URL", ""),
            publication_hub_url=os.getenv("PUBLICATION_HUB_URL", ""),
            publication_hub_token=os.getenv("PUBLICATION_HUB_TOKEN", ""),
            document_generator_base_url=os.getenv("DOCUMENT_GENERATOR_BASE_URL", ""),
            http_timeout=float(os.getenv("HTTP_TIMEOUT", "30")),
            http_retry_attempts=int(os.getenv("HTTP_RETRY_ATTEMPTS", "3")),
            blob_backend=os.getenv("BLOB_BACKEND", "local").strip().lower(),
            blob_local_dir=Path(os.getenv("BLOB_LOCAL_DIR", str(defaults.blob_local_dir))),
            blob_public_base_url=os.getenv("BLOB_PUBLIC_BASE_URL", ""),
            azure_storage_connection_string=os.getenv("AZURE_STORAGE_CONNECTION_STRING", ""),
            azure_storage_container=os.getenv("AZURE_STORAGE_CONTAINER", "court-lists"),
            sas_expiry_minutes=int(os.getenv("SAS_EXPIRY_MINUTES", "120")),
            offline_file_url_template=os.getenv(
                "OFFLINE_FILE_URL_TEMPLATE", DEFAULT_OFFLINE_FILE_URL_TEMPLATE
            ),
            pdf_failure_marks_failed=_flag("PDF_FAILURE_MARKS_FAILED", "0"),
            rate_limit=os.getenv("RATE_LIMIT", "60/minute"),
            rate_limit_enabled=_flag("RATE_LIMIT_ENABLED", "1"),
        )


# Global config instance
config = AppConfig.from_env()
