"""스캔 순서 검증 상태 머신

SKU 하나의 바코드 순서를 앞에서부터 하나씩 검증합니다.
상태: IDLE (SKU 미선택) -> AWAITING(position) -> COMPLETE
"""

import collections
import datetime
from enum import Enum
from typing import Callable, Deque, List, Optional, Union

from .events import (RunCompleted, SessionCleared, SessionStarted, StepAccepted,
                     StepRejected)
from .models import ScanSession, SkuDefinition
from ..utils.exceptions import (EmptyScanError, EmptySequenceError, InvalidStateError,
                                RunAlreadyCompleteError)

ScanOutcome = Union[StepAccepted, StepRejected, RunCompleted]

DEFAULT_HISTORY_SIZE = 500


class SequencerState(Enum):
    IDLE = "idle"
    AWAITING = "awaiting"
    COMPLETE = "complete"


class ScanSequencer:
    """선택된 SKU의 스캔 세션을 소유하고 스캔 입력을 순서대로 검증합니다."""

    def __init__(self, history_size: int = DEFAULT_HISTORY_SIZE,
                 clock: Callable[[], datetime.datetime] = datetime.datetime.now):
        self.session: Optional[ScanSession] = None
        self.history: Deque[object] = collections.deque(maxlen=history_size)
        self._listeners: List[Callable[[object], None]] = []
        self._clock = clock

    @property
    def state(self) -> SequencerState:
        if self.session is None:
            return SequencerState.IDLE
        if self.session.is_complete:
            return SequencerState.COMPLETE
        return SequencerState.AWAITING

    @property
    def position(self) -> Optional[int]:
        return self.session.position if self.session else None

    def add_listener(self, listener: Callable[[object], None]):
        """이벤트 수신 콜백을 등록합니다."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[object], None]):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event):
        self.history.append(event)
        for listener in list(self._listeners):
            listener(event)

    def _start_session(self, sku_id: str, sequence, reason: str):
        self.session = ScanSession(sku_id=sku_id, sequence=tuple(sequence), started_at=self._clock())
        self._emit(SessionStarted(self.session, reason))

    def select_sku(self, sku: Optional[SkuDefinition]):
        """SKU를 선택합니다. None이면 선택을 해제하고 IDLE 상태로 돌아갑니다."""
        if sku is None:
            previous = self.session
            self.session = None
            self._emit(SessionCleared(previous.sku_id if previous else None))
            return

        if not sku.sequence:
            raise EmptySequenceError(sku.id)
        self._start_session(sku.id, sku.sequence, "select")

    def restart(self, reason: str = "manual"):
        """현재 SKU와 동일한 순서 스냅샷으로 새 세션을 시작합니다."""
        if self.session is None:
            raise InvalidStateError("먼저 SKU를 선택해주세요.")
        self._start_session(self.session.sku_id, self.session.sequence, reason)

    def submit_scan(self, raw: str) -> ScanOutcome:
        """스캔 값 하나를 검증하고 결과 이벤트를 반환합니다."""
        value = (raw or "").strip()
        if not value:
            raise EmptyScanError()

        session = self.session
        if session is None:
            raise InvalidStateError("먼저 SKU를 선택해주세요.")
        if session.is_complete:
            raise RunAlreadyCompleteError()

        position = session.position
        spec = session.sequence[position]

        if not spec.matcher.test(value):
            event = StepRejected(session, position, value, spec)
            self._emit(event)
            return event

        session.accumulated_values.append(value)
        session.position += 1

        if session.is_complete:
            event = RunCompleted(session, position, value, spec)
        else:
            event = StepAccepted(session, position, value, spec)
        self._emit(event)
        return event
