from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Task Chat"
    debug: bool = False

    # Paths
    db_path: Path = Path(__file__).resolve().parent.parent.parent / "taskchat.db"

    # OpenAI
    openai_api_key: str = ""  # server-side fallback when the browser sends none
    openai_base_url: str = "https://api.openai.com/v1"
    chat_model: str = "gpt-4o"
    image_model: str = "gpt-image-1"
    image_size: str = "1024x1024"
    enable_mock_responses: bool = False

    # Sessions
    session_secret: str = "change-me"
    session_ttl_days: int = 30
    session_cookie: str = "taskchat_session"
    api_key_cookie: str = "openai_api_key"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = ["*"]

    model_config = {
        "env_file": str(Path(__file__).resolve().parent.parent.parent / ".env"),
        "env_prefix": "TASKCHAT_",
    }


settings = Settings()
