"""
Stage Configuration

CDK コンテキスト `stage` (dev / prod) ごとのデプロイ設定。
"""
from dataclasses import dataclass

from aws_cdk import RemovalPolicy

DEFAULT_STAGE = "dev"


@dataclass(frozen=True)
class StageConfig:
    """ステージごとの設定値"""

    name: str
    removal_policy: RemovalPolicy
    point_in_time_recovery: bool = False
    log_level: str = "INFO"
    batch_size: int = 100
    retry_attempts: int = 3

    @property
    def stack_id(self) -> str:
        return f"dynamodb-playground-{self.name}"


STAGES = {
    "dev": StageConfig(
        name="dev",
        removal_policy=RemovalPolicy.DESTROY,
        log_level="DEBUG",
    ),
    "prod": StageConfig(
        name="prod",
        removal_policy=RemovalPolicy.RETAIN,
        point_in_time_recovery=True,
    ),
}


def get_stage_config(stage: str | None = None) -> StageConfig:
    """ステージ名から設定を取得 (未指定なら dev)"""
    name = stage or DEFAULT_STAGE
    try:
        return STAGES[name]
    except KeyError:
        raise ValueError(
            f"Unknown stage {name!r}; expected one of: {', '.join(sorted(STAGES))}"
        ) from None
