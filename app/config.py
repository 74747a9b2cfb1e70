"""Application configuration using Pydantic Settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYSTEM_INSTRUCTION = (
    "You are an expert assistant for the Trademark Manual of Examining Procedure (TMEP). "
    "Your responses must be based on the latest published version of the TMEP. "
    "When you reference a section of the TMEP, you must embed a hyperlink to that section "
    "using markdown format (e.g., [TMEP §1202.01](https://tmep.uspto.gov/...)). "
    "Limit your responses to questions concerning information found within the TMEP."
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str = ""
    openai_model: str = "gpt-5-mini"
    openai_timeout: float = 60.0
    web_search_tool: str = "web_search"
    system_instruction: str = DEFAULT_SYSTEM_INSTRUCTION

    sanitize_html: bool = True
    max_sessions: int = 1000
    session_cookie_name: str = "tmep_session"

    app_title: str = "TMEP Expert Assistant"
    app_tagline: str = "Your guide to the Trademark Manual of Examining Procedure"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
