from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DICE_NOTATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    server_name: str = "mcp-dice-notation"
    # Logs go to stderr; stdout carries the stdio transport.
    log_level: str = "WARNING"


settings = Settings()
