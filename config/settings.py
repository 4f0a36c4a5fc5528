# DEPENDENCIES
from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application-wide settings: primary configuration source
    """
    # Application Info
    APP_NAME               : str            = "ContraScope"
    APP_VERSION            : str            = "1.0.0"
    API_PREFIX             : str            = "/api/v1"

    # Server Configuration
    HOST                   : str            = "0.0.0.0"
    PORT                   : int            = 8000
    RELOAD                 : bool           = False
    WORKERS                : int            = 1

    # CORS Settings
    CORS_ORIGINS           : list           = ["http://localhost:5173", "http://localhost:3000", "http://127.0.0.1:8000"]
    CORS_ALLOW_CREDENTIALS : bool           = True
    CORS_ALLOW_METHODS     : list           = ["*"]
    CORS_ALLOW_HEADERS     : list           = ["*"]

    # File Upload Settings
    MAX_UPLOAD_SIZE        : int            = 10 * 1024 * 1024  # 10 MB
    ALLOWED_EXTENSIONS     : list           = [".txt", ".md"]

    # Clause rule table (JSON); None keeps the built-in rules
    CLAUSE_RULES_FILE      : Optional[Path] = None

    # Remote analysis / QA endpoint; None disables the remote path
    REMOTE_API_BASE        : Optional[str]  = None
    REMOTE_TIMEOUT         : float          = 12.0

    # Word diff bound per document; the LCS table holds (m+1) x (n+1) int32 cells
    MAX_DIFF_TOKENS        : int            = 5000

    # Rendering
    DIFF_THEME             : str            = "dark"

    # Logging Settings
    LOG_LEVEL              : str            = "INFO"
    LOG_DIR                : Path           = Path("logs")


    class Config:
        env_file          = ".env"
        env_file_encoding = "utf-8"
        case_sensitive    = True


# Global settings instance
settings = Settings()
