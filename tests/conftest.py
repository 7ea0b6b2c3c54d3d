"""Shared fixtures: DynamoDB Stream レコードのビルダー"""
from typing import Any, Callable

import pytest
from boto3.dynamodb.types import TypeSerializer

_serializer = TypeSerializer()


def to_image(item: dict[str, Any]) -> dict[str, Any]:
    return {name: _serializer.serialize(value) for name, value in item.items()}


@pytest.fixture
def make_record() -> Callable[..., dict[str, Any]]:
    """NEW_AND_OLD_IMAGES ストリームレコードを組み立てる"""

    def _make(
        event_name: str,
        sequence_number: str = "100",
        new: dict[str, Any] | None = None,
        old: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        source = new or old or {}
        change: dict[str, Any] = {
            "Keys": to_image({k: source[k] for k in ("id", "cpf") if k in source}),
            "SequenceNumber": sequence_number,
            "SizeBytes": 64,
            "StreamViewType": "NEW_AND_OLD_IMAGES",
        }
        if new is not None:
            change["NewImage"] = to_image(new)
        if old is not None:
            change["OldImage"] = to_image(old)
        return {
            "eventID": f"evt-{sequence_number}",
            "eventName": event_name,
            "eventVersion": "1.1",
            "eventSource": "aws:dynamodb",
            "awsRegion": "us-east-1",
            "dynamodb": change,
            "eventSourceARN": "arn:aws:dynamodb:us-east-1:123456789012:table/t/stream/2024",
        }

    return _make


@pytest.fixture
def ana() -> dict[str, Any]:
    return {"id": "p-1", "cpf": "123.456.789-00", "nome": "Ana", "idade": 30}
