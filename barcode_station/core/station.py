"""검증 스테이션 컨트롤러

설정 저장소, 스캔 시퀀서, 기록 저장, 자동 재시작 스케줄러를 연결합니다.
화면 계층은 이 클래스에 명령을 보내고 이벤트를 받아 표시만 합니다.
"""

import datetime
from typing import Any, Callable, List, Optional

from .config_store import ConfigStore
from .events import (RecordSaved, RecordWriteFailed, RunCompleted, SessionCleared,
                     SessionStarted, StepAccepted, StepRejected)
from .models import RunRecord, RECORD_DATE_FORMAT, SkuDefinition
from .recorder import RunRecorder
from .scheduler import AutoRestartScheduler
from .sequencer import ScanOutcome, ScanSequencer
from ..utils.exceptions import RecordWriteError, SessionError
from ..utils.logger import EventLogger


class VerificationStation:
    """스테이션 한 대의 검증 흐름을 관리합니다."""

    def __init__(self, store: ConfigStore, recorder: RunRecorder, timer_root: Any,
                 event_logger: Optional[EventLogger] = None,
                 clock: Callable[[], datetime.datetime] = datetime.datetime.now):
        self.store = store
        self.recorder = recorder
        self.event_logger = event_logger
        self.clock = clock
        self._listeners: List[Callable[[object], None]] = []

        self.sequencer = ScanSequencer(clock=clock)
        self.scheduler = AutoRestartScheduler(timer_root, self.sequencer, store.auto_restart_seconds)
        self.sequencer.add_listener(self._on_sequencer_event)
        self.sequencer.add_listener(self.scheduler.handle_event)

    def add_listener(self, listener: Callable[[object], None]):
        self._listeners.append(listener)

    def _notify(self, event):
        for listener in list(self._listeners):
            listener(event)

    def _log_event(self, event_type: str, detail: Optional[dict] = None):
        if self.event_logger:
            self.event_logger.log_event(event_type, detail)

    # ------------------------------------------------------------------
    # 명령
    # ------------------------------------------------------------------

    @property
    def current_sku_id(self) -> Optional[str]:
        session = self.sequencer.session
        return session.sku_id if session else None

    def eligible_skus(self) -> List[SkuDefinition]:
        return self.store.get_eligible_skus()

    def select_sku(self, sku_id: Optional[str]):
        """SKU를 선택합니다. None 또는 빈 문자열이면 선택을 해제합니다."""
        if not sku_id:
            self.sequencer.select_sku(None)
            return
        sku = self.store.get_sku(sku_id)
        if sku is None:
            raise SessionError(f"등록되지 않은 SKU입니다: {sku_id}")
        # 바코드가 없는 SKU는 시퀀서가 EmptySequenceError로 거부
        self.sequencer.select_sku(sku)

    def submit_scan(self, raw: str) -> ScanOutcome:
        return self.sequencer.submit_scan(raw)

    def restart(self):
        self.sequencer.restart(reason="manual")

    def reload_configuration(self) -> str:
        """설정을 다시 읽습니다. 진행 중인 세션은 기존 스냅샷을 계속 사용합니다."""
        path = self.store.load()
        self.scheduler.delay_seconds = self.store.auto_restart_seconds
        self._log_event('CONFIG_LOADED', {'path': path, 'sku_count': len(self.store.skus)})
        return path

    def apply_auto_restart_seconds(self):
        self.scheduler.delay_seconds = self.store.auto_restart_seconds

    def todays_pass_count(self, sku_id: Optional[str] = None) -> int:
        sku_id = sku_id or self.current_sku_id
        if not sku_id:
            return 0
        return self.recorder.count_records(sku_id, self.clock().strftime(RECORD_DATE_FORMAT))

    # ------------------------------------------------------------------
    # 이벤트 처리
    # ------------------------------------------------------------------

    def _on_sequencer_event(self, event):
        if isinstance(event, SessionStarted):
            self._log_event('SESSION_STARTED', {'sku': event.session.sku_id, 'reason': event.reason})
        elif isinstance(event, SessionCleared):
            self._log_event('SKU_DESELECTED', {'sku': event.sku_id})
        elif isinstance(event, RunCompleted):
            self._log_event('RUN_COMPLETED', {
                'sku': event.session.sku_id,
                'values': list(event.session.accumulated_values),
            })
        elif isinstance(event, StepAccepted):
            self._log_event('SCAN_ACCEPTED', {
                'sku': event.session.sku_id, 'step': event.spec.name, 'value': event.value,
            })
        elif isinstance(event, StepRejected):
            self._log_event('SCAN_REJECTED', {
                'sku': event.session.sku_id, 'step': event.spec.name, 'value': event.value,
                'expected_pattern': event.spec.pattern,
            })

        self._notify(event)

        if isinstance(event, RunCompleted):
            self._record_run(event)

    def _record_run(self, event: RunCompleted):
        run = RunRecord.from_session(event.session, self.clock())
        try:
            path = self.recorder.record(run)
        except RecordWriteError as e:
            self._log_event('RECORD_WRITE_FAILED', {'sku': run.sku_id, 'path': e.path, 'error': e.reason})
            self._notify(RecordWriteFailed(event.session, e))
            return
        self._log_event('RECORD_SAVED', {'sku': run.sku_id, 'path': path})
        self._notify(RecordSaved(event.session, path))
