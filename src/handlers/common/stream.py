"""
DynamoDB Stream Records

ストリームレコードのパースと、部分バッチ失敗 (ReportBatchItemFailures)
を返すバッチ処理ループ。
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import structlog
from boto3.dynamodb.types import TypeDeserializer

from src.domain.person import Person, PersonImageError

logger = structlog.get_logger()

_deserializer = TypeDeserializer()

INSERT = "INSERT"
MODIFY = "MODIFY"
REMOVE = "REMOVE"
EVENT_NAMES = (INSERT, MODIFY, REMOVE)


class InvalidStreamRecordError(ValueError):
    """ストリームレコードの形式が不正"""

    pass


def deserialize_image(image: dict[str, Any]) -> dict[str, Any]:
    """DynamoDB 形式のイメージを Python dict に変換"""
    return {name: _deserializer.deserialize(value) for name, value in image.items()}


@dataclass(frozen=True)
class StreamRecord:
    """NEW_AND_OLD_IMAGES ストリームの1レコード"""

    event_id: str
    event_name: str
    sequence_number: str
    keys: dict[str, Any]
    new_image: Person | None = None
    old_image: Person | None = None

    @classmethod
    def parse(cls, raw: dict[str, Any]) -> "StreamRecord":
        event_name = raw.get("eventName")
        if event_name not in EVENT_NAMES:
            raise InvalidStreamRecordError(f"Unknown eventName: {event_name!r}")

        change = raw.get("dynamodb")
        if not change:
            raise InvalidStreamRecordError("Record has no 'dynamodb' payload")

        sequence_number = change.get("SequenceNumber")
        if not sequence_number:
            raise InvalidStreamRecordError("Record has no SequenceNumber")

        # INSERT は NewImage のみ、REMOVE は OldImage のみ、MODIFY は両方
        new_raw = change.get("NewImage")
        old_raw = change.get("OldImage")
        if event_name in (INSERT, MODIFY) and not new_raw:
            raise InvalidStreamRecordError(f"{event_name} record has no NewImage")
        if event_name in (MODIFY, REMOVE) and not old_raw:
            raise InvalidStreamRecordError(f"{event_name} record has no OldImage")

        try:
            new_image = Person.from_image(deserialize_image(new_raw)) if new_raw else None
            old_image = Person.from_image(deserialize_image(old_raw)) if old_raw else None
        except PersonImageError as e:
            raise InvalidStreamRecordError(str(e)) from e

        return cls(
            event_id=raw.get("eventID", ""),
            event_name=event_name,
            sequence_number=sequence_number,
            keys=deserialize_image(change.get("Keys", {})),
            new_image=new_image,
            old_image=old_image,
        )


RecordAction = Callable[[StreamRecord], None]


def process_batch(
    event: dict[str, Any],
    expected_event_name: str,
    action: RecordAction,
) -> dict[str, list[dict[str, str]]]:
    """
    バッチ内のレコードを順に処理し、部分バッチ失敗レスポンスを返す。

    最初に失敗したレコードで処理を止め、そのシーケンス番号だけを返す。
    プラットフォームはそのレコードからバッチを再試行する。

    Args:
        event: Lambda に渡されたストリームイベント
        expected_event_name: フィルタで許可したイベント種別
        action: 1レコードごとの処理

    Returns:
        {"batchItemFailures": [...]}
    """
    records = event.get("Records", [])
    log = logger.bind(expected_event_name=expected_event_name)
    log.info("batch_received", record_count=len(records))

    processed = skipped = 0
    for raw in records:
        sequence_number = (raw.get("dynamodb") or {}).get("SequenceNumber", "")
        try:
            record = StreamRecord.parse(raw)
            if record.event_name != expected_event_name:
                log.warning(
                    "unexpected_event_name",
                    event_name=record.event_name,
                    sequence_number=record.sequence_number,
                )
                skipped += 1
                continue
            action(record)
        except Exception:
            log.exception(
                "record_failed",
                event_id=raw.get("eventID"),
                sequence_number=sequence_number,
            )
            return {"batchItemFailures": [{"itemIdentifier": sequence_number}]}
        processed += 1

    log.info("batch_completed", processed=processed, skipped=skipped)
    return {"batchItemFailures": []}
