from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    META_VERIFY_TOKEN: str = ""
    META_APP_SECRET: str | None = None
    META_PAGE_ACCESS_TOKEN: str | None = None
    META_GRAPH_API_VERSION: str = "v20.0"
    META_GRAPH_BASE_URL: str = "https://graph.facebook.com"

    MESSENGER_LANGUAGE: str = "ar"  # "ar" | "fr" | "auto"
    MESSENGER_QUICK_REPLIES: bool = True
    DEFAULT_LANGUAGE: str = "ar"

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    AUTO_REPLY_ENABLED: bool = True
    SEED_DEFAULT_CATALOG: bool = True
    HTTP_TIMEOUT_SECONDS: float = 10.0

    @property
    def messenger_send_endpoint(self) -> str:
        return f"{self.META_GRAPH_BASE_URL.rstrip('/')}/{self.META_GRAPH_API_VERSION}/me/messages"


settings = Settings()
