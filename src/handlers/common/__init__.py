from src.handlers.common.context import bind_invocation_context
from src.handlers.common.stream import (
    EVENT_NAMES,
    INSERT,
    MODIFY,
    REMOVE,
    InvalidStreamRecordError,
    StreamRecord,
    deserialize_image,
    process_batch,
)

__all__ = [
    "EVENT_NAMES",
    "INSERT",
    "MODIFY",
    "REMOVE",
    "InvalidStreamRecordError",
    "StreamRecord",
    "bind_invocation_context",
    "deserialize_image",
    "process_batch",
]
