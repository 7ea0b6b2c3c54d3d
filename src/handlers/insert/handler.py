"""
Insert Handler Lambda

ストリームの INSERT イベントのみを受け取る (フィルタはプラットフォーム側)。
"""
from typing import Any

import structlog

from src.handlers.common import INSERT, StreamRecord, bind_invocation_context, process_batch
from src.infrastructure.config import get_settings
from src.infrastructure.logging import configure_logging

configure_logging(get_settings().log_level)
logger = structlog.get_logger()


def lambda_handler(event: dict, context: Any) -> dict:
    """Lambda エントリポイント"""
    bind_invocation_context(context, handler="insert")
    return process_batch(event, INSERT, handle_insert)


def handle_insert(record: StreamRecord) -> None:
    """作成された Person を記録"""
    person = record.new_image
    logger.info(
        "person_inserted",
        table=get_settings().table_name,
        id=person.id,
        cpf=person.cpf,
        nome=person.nome,
        sequence_number=record.sequence_number,
    )
