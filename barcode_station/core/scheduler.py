"""자동 재시작 스케줄러

tkinter 루트의 after / after_cancel 로 단발 타이머를 예약합니다.
타이머 콜백은 스캔 처리와 같은 메인 루프에서 실행됩니다.
"""

from typing import Any, Optional

from .events import RunCompleted, SessionCleared, SessionStarted
from .models import ScanSession
from .sequencer import ScanSequencer
from ..utils.exceptions import ConfigurationError


class AutoRestartScheduler:
    """실행 완료 후 지정한 시간이 지나면 같은 SKU로 재시작합니다. 0초는 비활성화입니다."""

    def __init__(self, root: Any, sequencer: ScanSequencer, delay_seconds: float = 0):
        self.root = root
        self.sequencer = sequencer
        self._delay_seconds = 0.0
        self.delay_seconds = delay_seconds
        self._job: Optional[str] = None
        self._armed_session: Optional[ScanSession] = None

    @property
    def delay_seconds(self) -> float:
        return self._delay_seconds

    @delay_seconds.setter
    def delay_seconds(self, value: float):
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"자동 재시작 시간이 올바르지 않습니다: {value!r}")
        if value < 0:
            raise ConfigurationError("자동 재시작 시간은 0 이상이어야 합니다.")
        self._delay_seconds = value

    @property
    def is_armed(self) -> bool:
        return self._job is not None

    def handle_event(self, event):
        """시퀀서 이벤트 리스너"""
        if isinstance(event, RunCompleted):
            self.arm(event.session)
        elif isinstance(event, (SessionStarted, SessionCleared)):
            self.cancel()

    def arm(self, session: ScanSession):
        """세션에 묶인 단발 타이머를 예약합니다. 기존 타이머는 취소됩니다."""
        self.cancel()
        if self._delay_seconds <= 0:
            return
        delay_ms = int(self._delay_seconds * 1000)
        self._armed_session = session
        self._job = self.root.after(delay_ms, lambda: self._on_expire(session))

    def cancel(self):
        if self._job is not None:
            self.root.after_cancel(self._job)
        self._job = None
        self._armed_session = None

    def _on_expire(self, session: ScanSession):
        if self._armed_session is not session:
            return
        self._job = None
        self._armed_session = None
        # 이미 다른 세션으로 교체되었으면 무시
        if self.sequencer.session is not session:
            return
        self.sequencer.restart(reason="auto")
