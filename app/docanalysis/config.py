"""
Application configuration using Pydantic Settings.

Automatically loads environment variables from .env files.
"""

from functools import lru_cache
from pathlib import Path

from dotenv import find_dotenv
from pydantic import BaseModel, ConfigDict, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Handle both package imports and standalone imports
try:
    from .services.exceptions import ConfigurationError
except ImportError:
    from services.exceptions import ConfigurationError

ENV_FILE = Path(__file__).parent / ".env"

EnvFiles = Path | str | tuple[Path | str, ...]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Mistral (OpenAI-compatible chat completions)
    mistral_api_key: SecretStr | None = None
    mistral_base_url: str = "https://api.mistral.ai/v1"
    mistral_model: str = "mistral-large-latest"

    # External text extraction utility (poppler-utils)
    pdftotext_path: str = "pdftotext"

    # Diagnostics
    log_extracted_text: bool = True
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        # Load from .env file in the package directory
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
        # Case insensitive environment variable names
        case_sensitive=False,
    )


class Credentials(BaseModel):
    """API credential resolved for a single analysis call."""

    model_config = ConfigDict(frozen=True)

    api_key: SecretStr


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration loaded from environment.
    """
    return Settings()


def default_env_files() -> tuple[Path, ...]:
    """
    .env files consulted for the credential, lowest priority first.

    The package .env, then the first .env found in the current working
    directory or one of its parents.
    """
    files = [ENV_FILE]
    found = find_dotenv(usecwd=True)
    if found:
        files.append(Path(found))
    return tuple(files)


def resolve_credentials(env_file: EnvFiles | None = None) -> Credentials:
    """
    Resolve the Mistral API key for one call.

    Settings are rebuilt on every call so that the .env file is read at
    call time. Process environment variables win over .env values.

    Args:
        env_file: .env file(s) to read. None searches default_env_files();
            an empty tuple disables file loading.

    Returns:
        Credentials holding the API key.

    Raises:
        ConfigurationError: If MISTRAL_API_KEY is unset or blank.
    """
    if env_file is None:
        env_file = default_env_files()
    settings = Settings(_env_file=env_file)
    api_key = settings.mistral_api_key
    if api_key is None or not api_key.get_secret_value().strip():
        raise ConfigurationError(
            "API key missing. Set MISTRAL_API_KEY in the environment or in .env."
        )
    return Credentials(api_key=api_key)
