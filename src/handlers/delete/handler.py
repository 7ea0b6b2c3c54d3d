"""
Delete Handler Lambda

ストリームの REMOVE イベントのみを受け取る。
"""
from typing import Any

import structlog

from src.handlers.common import REMOVE, StreamRecord, bind_invocation_context, process_batch
from src.infrastructure.config import get_settings
from src.infrastructure.logging import configure_logging

configure_logging(get_settings().log_level)
logger = structlog.get_logger()


def lambda_handler(event: dict, context: Any) -> dict:
    """Lambda エントリポイント"""
    bind_invocation_context(context, handler="delete")
    return process_batch(event, REMOVE, handle_delete)


def handle_delete(record: StreamRecord) -> None:
    """削除された Person を記録 (OldImage から)"""
    person = record.old_image
    logger.info(
        "person_removed",
        table=get_settings().table_name,
        id=person.id,
        cpf=person.cpf,
        nome=person.nome,
        sequence_number=record.sequence_number,
    )
