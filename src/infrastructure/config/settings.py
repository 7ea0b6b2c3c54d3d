"""Application Settings"""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    ストリームハンドラの実行時設定

    12-Factor App の Config 原則に従い、
    すべての設定は環境変数から取得する。
    """

    model_config = SettingsConfigDict(
        env_prefix="PLAYGROUND_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Service
    service_name: str = "dynamodb-playground"
    stage: str = "dev"
    log_level: str = "INFO"

    # DynamoDB (CDK が TABLE_NAME を注入する)
    table_name: str = Field(default="", validation_alias="TABLE_NAME")


@lru_cache()
def get_settings() -> Settings:
    """設定のシングルトンインスタンスを取得"""
    return Settings()
