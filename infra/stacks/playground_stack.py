"""
DynamoDB Playground Stack (Serverless)

- Table (On-Demand, NEW_AND_OLD_IMAGES Stream)
- GSI "secundary" (cpf, nome)
- Stream Handlers (INSERT / MODIFY / REMOVE, イベント種別ごとにフィルタ)
"""
from pathlib import Path

from aws_cdk import (
    Stack,
    CfnOutput,
    Duration,
    BundlingOptions,
    aws_dynamodb as dynamodb,
    aws_lambda as lambda_,
    aws_lambda_event_sources as event_sources,
    aws_logs as logs,
    aws_sqs as sqs,
)
from constructs import Construct

from infra.config import StageConfig, get_stage_config

PROJECT_ROOT = Path(__file__).resolve().parents[2]

HANDLER_RUNTIME = lambda_.Runtime.PYTHON_3_12

# (construct id, ハンドラモジュール, ストリームの eventName)
STREAM_HANDLERS = (
    ('insert-function', 'insert', 'INSERT'),
    ('update-function', 'update', 'MODIFY'),
    ('delete-function', 'delete', 'REMOVE'),
)

ASSET_EXCLUDE = [
    'cdk.out',
    '.git',
    '.venv',
    'infra',
    'tests',
    '**/__pycache__',
    '.pytest_cache',
    '*.egg-info',
]


class DynamoDbPlaygroundStack(Stack):
    """ストリーム付きテーブルと3つのストリームハンドラを管理するスタック。"""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        stage: StageConfig | None = None,
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.stage = stage or get_stage_config()

        # =================================================================
        # DynamoDB Table
        # =================================================================

        self.table = dynamodb.Table(
            self, 'table',
            partition_key=dynamodb.Attribute(
                name='id',
                type=dynamodb.AttributeType.STRING
            ),
            sort_key=dynamodb.Attribute(
                name='cpf',
                type=dynamodb.AttributeType.STRING
            ),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            stream=dynamodb.StreamViewType.NEW_AND_OLD_IMAGES,
            point_in_time_recovery=self.stage.point_in_time_recovery,
            removal_policy=self.stage.removal_policy,
        )

        # GSI for cpf + nome queries
        self.table.add_global_secondary_index(
            index_name='secundary',
            partition_key=dynamodb.Attribute(
                name='cpf',
                type=dynamodb.AttributeType.STRING
            ),
            sort_key=dynamodb.Attribute(
                name='nome',
                type=dynamodb.AttributeType.STRING
            ),
        )

        # =================================================================
        # Dead Letter Queue (再試行を使い切ったバッチ)
        # =================================================================

        self.dlq = sqs.Queue(
            self, 'StreamDeadLetterQueue',
            retention_period=Duration.days(14),
            removal_policy=self.stage.removal_policy,
        )

        # =================================================================
        # Stream Handler Lambdas
        # =================================================================

        code = self._handler_code()
        self.functions: dict[str, lambda_.Function] = {}
        for function_id, module, event_name in STREAM_HANDLERS:
            self.functions[event_name] = self._add_stream_handler(
                function_id, module, event_name, code
            )

        self.insert_fn = self.functions['INSERT']
        self.update_fn = self.functions['MODIFY']
        self.delete_fn = self.functions['REMOVE']

        # Outputs
        CfnOutput(self, 'TableName', value=self.table.table_name)
        CfnOutput(self, 'TableStreamArn', value=self.table.table_stream_arn)
        CfnOutput(self, 'DeadLetterQueueUrl', value=self.dlq.queue_url)

    def _handler_code(self) -> lambda_.Code:
        """src/ と依存ライブラリを1つのアセットにまとめる"""
        return lambda_.Code.from_asset(
            str(PROJECT_ROOT),
            exclude=ASSET_EXCLUDE,
            bundling=BundlingOptions(
                image=HANDLER_RUNTIME.bundling_image,
                command=[
                    'bash', '-c',
                    'pip install -r src/requirements.txt -t /asset-output'
                    ' && cp -au src /asset-output/',
                ],
            ),
        )

    def _add_stream_handler(
        self,
        construct_id: str,
        module: str,
        event_name: str,
        code: lambda_.Code,
    ) -> lambda_.Function:
        fn = lambda_.Function(
            self, construct_id,
            runtime=HANDLER_RUNTIME,
            handler=f'src.handlers.{module}.handler.lambda_handler',
            code=code,
            memory_size=256,
            timeout=Duration.seconds(60),
            environment={
                'TABLE_NAME': self.table.table_name,
                'PLAYGROUND_STAGE': self.stage.name,
                'PLAYGROUND_LOG_LEVEL': self.stage.log_level,
                'PLAYGROUND_SERVICE_NAME': f'dynamodb-playground-{module}',
            },
            log_retention=logs.RetentionDays.ONE_WEEK,
        )

        self.table.grant_read_data(fn)

        # DynamoDB Stream Trigger (1種類の eventName のみ通す)
        fn.add_event_source(
            event_sources.DynamoEventSource(
                self.table,
                starting_position=lambda_.StartingPosition.TRIM_HORIZON,
                batch_size=self.stage.batch_size,
                retry_attempts=self.stage.retry_attempts,
                report_batch_item_failures=True,
                on_failure=event_sources.SqsDlq(self.dlq),
                filters=[
                    lambda_.FilterCriteria.filter({
                        'eventName': lambda_.FilterRule.is_equal(event_name),
                    }),
                ],
            )
        )
        return fn
