"""Invocation Context"""
from __future__ import annotations

from typing import Any

import structlog

from src.infrastructure.config import get_settings


def bind_invocation_context(context: Any, handler: str) -> None:
    """Lambda 呼び出しごとのログコンテキストを設定"""
    settings = get_settings()
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        service=settings.service_name,
        stage=settings.stage,
        handler=handler,
        aws_request_id=getattr(context, "aws_request_id", None),
        function_name=getattr(context, "function_name", None),
    )
