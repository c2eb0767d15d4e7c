from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    max_files: int = 20
    accepted_mime_types: list[str] = ["image/png", "image/jpeg", "image/webp"]
    preview_max_size: int = 256

    export_filename: str = "prospects.csv"

    phone_prefixes: list[str] = ["017", "018", "019", "016", "013", "014", "015"]

    extraction_provider: str = "openai"

    extraction_openai_api_key: str = ""
    extraction_openai_model_name: str = "gpt-4o-mini"
    extraction_openai_timeout_seconds: int = 60
    extraction_openai_temperature: float = 0.1

    extraction_openai_compatible_api_key: str = ""
    extraction_openai_compatible_model_name: str = ""
    extraction_openai_compatible_base_url: str = ""
    extraction_openai_compatible_timeout_seconds: int = 60

    extraction_openrouter_api_key: str = ""
    extraction_openrouter_model_name: str = ""
    extraction_openrouter_timeout_seconds: int = 60

    extraction_groq_api_key: str = ""
    extraction_groq_model_name: str = ""
    extraction_groq_timeout_seconds: int = 60

    extraction_together_api_key: str = ""
    extraction_together_model_name: str = ""
    extraction_together_timeout_seconds: int = 60

    extraction_deepseek_api_key: str = ""
    extraction_deepseek_model_name: str = ""
    extraction_deepseek_timeout_seconds: int = 60

    extraction_ollama_api_key: str = "ollama"
    extraction_ollama_model_name: str = ""
    extraction_ollama_timeout_seconds: int = 120
