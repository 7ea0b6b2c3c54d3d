"""
Update Handler Lambda

ストリームの MODIFY イベントのみを受け取る。
更新前後のイメージを比較し、変更された属性を記録する。
"""
from typing import Any

import structlog

from src.domain.person import changed_attributes
from src.handlers.common import MODIFY, StreamRecord, bind_invocation_context, process_batch
from src.infrastructure.config import get_settings
from src.infrastructure.logging import configure_logging

configure_logging(get_settings().log_level)
logger = structlog.get_logger()


def lambda_handler(event: dict, context: Any) -> dict:
    """Lambda エントリポイント"""
    bind_invocation_context(context, handler="update")
    return process_batch(event, MODIFY, handle_update)


def handle_update(record: StreamRecord) -> None:
    changed = changed_attributes(record.old_image, record.new_image)
    if not changed:
        # 同値での上書きでも MODIFY は発生する
        logger.info(
            "person_unchanged",
            id=record.new_image.id,
            sequence_number=record.sequence_number,
        )
        return

    logger.info(
        "person_updated",
        table=get_settings().table_name,
        id=record.new_image.id,
        cpf=record.new_image.cpf,
        changed_attributes=changed,
        sequence_number=record.sequence_number,
    )
