"""Environment-based configuration for the knowledge bridge."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Knowledge bridge settings, loaded from environment variables."""

    # Server
    PORT: int = 3000
    CORS_ALLOW_ORIGINS: str = "*"

    # Notion connection (empty token or database id = Notion not configured)
    NOTION_TOKEN: str = ""
    DATABASE_ID: str = ""
    NOTION_API_URL: str = "https://api.notion.com/v1"
    NOTION_VERSION: str = "2022-06-28"

    # Notion caps page_size at 100
    NOTION_PAGE_SIZE: int = 100
    NOTION_TIMEOUT_SECONDS: int = 30
    NOTION_CONNECT_TIMEOUT: int = 10

    # Default encoding for /kakao/knowledge: "values" or "objects"
    OUTPUT_FORMAT: str = "values"

    model_config = {"env_prefix": "", "case_sensitive": True}

    @property
    def notion_configured(self) -> bool:
        return bool(self.NOTION_TOKEN and self.DATABASE_ID)


settings = Settings()
