"""구조화 이벤트 발행 모듈 — 서비스 작업 관측.

Structured event emission for service operations.
Services receive an ``EventEmitter`` and wrap each operation in
``operation()``, which emits ``started``/``succeeded``/``failed`` events.
Events always go to the ``app.events`` logger and, when Axiom is
configured, are also ingested into the Axiom dataset.

Usage:
    with event_emitter.operation("user.create") as result:
        user = ...
        result["user_id"] = str(user.id)
"""

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

from axiom_py import Client as AxiomClient

from app.config import settings

logger: logging.Logger = logging.getLogger("app.events")


class EventEmitter:
    """구조화 이벤트 발행기.

    Structured event emitter shared by services and the request middleware.

    Attributes:
        client: Axiom 클라이언트, 미설정 시 None (Axiom client, None when not configured)
        dataset: Axiom 데이터셋 이름 (Target Axiom dataset)
    """

    def __init__(self, client: AxiomClient | None = None, dataset: str = "") -> None:
        self.client: AxiomClient | None = client
        self.dataset: str = dataset

    @property
    def ships_to_axiom(self) -> bool:
        return self.client is not None and bool(self.dataset)

    def emit(self, event: str, level: int = logging.INFO, **fields: Any) -> None:
        """이벤트 하나를 기록합니다.

        Record one event to the logger and, if configured, to Axiom.
        An ingest failure is logged and never interrupts the caller.

        Args:
            event: 이벤트 이름 (Event name, e.g. "user.create")
            level: 로그 레벨 (Logging level for the local record)
            **fields: 이벤트 속성 (Event attributes)
        """
        payload: dict[str, Any] = {
            "_time": datetime.now(timezone.utc).isoformat(),
            "event": event,
            **fields,
        }
        logger.log(level, "%s %s", event, fields)

        if not self.ships_to_axiom:
            return
        try:
            self.client.ingest_events(self.dataset, [payload])
        except Exception:
            logger.warning("Axiom ingest failed for event %s", event, exc_info=True)

    @contextmanager
    def operation(self, name: str, **fields: Any) -> Iterator[dict[str, Any]]:
        """작업 시작/성공/실패 이벤트를 발행하는 컨텍스트 매니저.

        Emit ``started`` on entry, then ``succeeded`` or ``failed`` on exit.
        Exceptions are re-raised unchanged. The yielded dict collects
        attributes known only once the work is done (e.g. a new record id);
        they are attached to the closing event.

        Args:
            name: 작업 이름 (Operation name)
            **fields: 모든 이벤트에 포함할 속성 (Attributes attached to every event)
        """
        start: float = time.perf_counter()
        result: dict[str, Any] = {}
        self.emit(name, level=logging.DEBUG, status="started", **fields)
        try:
            yield result
        except Exception as exc:
            self.emit(
                name,
                level=logging.WARNING,
                status="failed",
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                error=type(exc).__name__,
                detail=str(getattr(exc, "detail", exc))[:300],
                **fields,
                **result,
            )
            raise
        self.emit(
            name,
            status="succeeded",
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
            **fields,
            **result,
        )


def build_event_emitter() -> EventEmitter:
    """설정으로부터 이벤트 발행기를 생성합니다 (Build the emitter from settings)."""
    client: AxiomClient | None = None
    if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
        client = AxiomClient(token=settings.AXIOM_API_TOKEN)
    return EventEmitter(client, settings.AXIOM_DATASET)


# 싱글턴 인스턴스 — Singleton instance
event_emitter: EventEmitter = build_event_emitter()
