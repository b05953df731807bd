"""검증 스테이션 통합 테스트"""

import unittest
import tempfile
import shutil
import datetime
import os
import sys

# 상위 디렉토리의 모듈들을 import 하기 위해 경로 추가
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from fakes import FakeRoot
from barcode_station.core.config_store import ConfigStore
from barcode_station.core.events import (RecordSaved, RecordWriteFailed, RunCompleted, SessionStarted,
                                         StepAccepted, StepRejected)
from barcode_station.core.recorder import RunRecorder
from barcode_station.core.sequencer import SequencerState
from barcode_station.core.station import VerificationStation
from barcode_station.utils.exceptions import EmptySequenceError, SessionError
from barcode_station.utils.logger import EventLogger

FIXED_NOW = datetime.datetime(2024, 3, 2, 14, 30, 0)


class TestVerificationStation(unittest.TestCase):
    """VerificationStation 테스트"""

    def setUp(self):
        """테스트 시작 전 설정"""
        self.temp_dir = tempfile.mkdtemp()
        self.store = ConfigStore(config_path=os.path.join(self.temp_dir, "config.json"), search_dirs=[])
        self.store.add_sku("X1")
        self.store.add_barcode("X1", "Serial", r'^\d{4}$')
        self.store.add_barcode("X1", "Lot", r'^L-')
        self.store.add_sku("EMPTY")
        self.store.set_auto_restart_seconds(3)
        self.store.save()

        self.records_folder = os.path.join(self.temp_dir, "records")
        self.root = FakeRoot()
        self.station = VerificationStation(self.store, RunRecorder(self.records_folder), self.root,
                                           clock=lambda: FIXED_NOW)
        self.events = []
        self.station.add_listener(self.events.append)

    def tearDown(self):
        """테스트 종료 후 정리"""
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _complete_run(self):
        self.station.select_sku("x1")
        self.station.submit_scan("1234")
        return self.station.submit_scan("L-77")

    def test_unknown_sku_rejected(self):
        """등록되지 않은 SKU는 SessionError"""
        with self.assertRaises(SessionError) as ctx:
            self.station.select_sku("NOPE")
        self.assertNotIsInstance(ctx.exception, EmptySequenceError)
        self.assertIsNone(self.station.current_sku_id)

    def test_empty_sku_rejected_with_empty_sequence_error(self):
        """바코드가 없는 SKU는 EmptySequenceError, 현재 세션 유지"""
        self.station.select_sku("X1")
        session = self.station.sequencer.session
        with self.assertRaises(EmptySequenceError):
            self.station.select_sku("EMPTY")
        self.assertIs(self.station.sequencer.session, session)
        self.assertEqual(self.station.current_sku_id, "X1")

    def test_eligible_skus(self):
        """선택 가능한 SKU 목록"""
        self.assertEqual([sku.id for sku in self.station.eligible_skus()], ["X1"])

    def test_full_run_writes_record(self):
        """완료 시 기록 저장 후 RecordSaved 이벤트"""
        event = self._complete_run()
        self.assertIsInstance(event, RunCompleted)

        kinds = [type(e) for e in self.events]
        self.assertEqual(kinds, [SessionStarted, StepAccepted, RunCompleted, RecordSaved])

        saved = self.events[-1]
        self.assertEqual(saved.path, os.path.join(self.records_folder, "X1_2024_03_02.csv"))
        with open(saved.path, 'r', encoding='utf-8') as f:
            self.assertEqual(f.read().splitlines(), [
                "SKU,Date,Time,Serial,Lot",
                "X1,2024_03_02,14:30:00,1234,L-77",
            ])
        self.assertEqual(self.station.todays_pass_count(), 1)

    def test_rejected_scan_is_not_recorded(self):
        """불일치 스캔은 기록하지 않음"""
        self.station.select_sku("X1")
        event = self.station.submit_scan("12a4")
        self.assertIsInstance(event, StepRejected)
        self.assertFalse(os.path.exists(self.records_folder))
        self.assertEqual(self.station.todays_pass_count("X1"), 0)

    def test_record_write_failure(self):
        """기록 실패 시 RecordWriteFailed, 세션은 완료 상태 유지"""
        blocker = os.path.join(self.temp_dir, "blocker")
        with open(blocker, 'w') as f:
            f.write("x")
        self.station.recorder = RunRecorder(os.path.join(blocker, "records"))

        self._complete_run()

        failed = self.events[-1]
        self.assertIsInstance(failed, RecordWriteFailed)
        self.assertEqual(self.station.sequencer.state, SequencerState.COMPLETE)
        self.assertEqual(failed.session.accumulated_values, ["1234", "L-77"])

    def test_auto_restart(self):
        """설정된 시간 후 같은 SKU로 자동 재시작"""
        self._complete_run()
        self.root.advance(3)
        started = self.events[-1]
        self.assertIsInstance(started, SessionStarted)
        self.assertEqual(started.reason, "auto")
        self.assertEqual(self.station.current_sku_id, "X1")
        self.assertEqual(self.station.sequencer.position, 0)

    def test_manual_restart_before_auto_restart(self):
        """자동 재시작 전에 수동 재시작하면 자동 재시작은 일어나지 않음"""
        self._complete_run()
        self.root.advance(1)
        self.station.restart()
        self.root.advance(10)
        reasons = [e.reason for e in self.events if isinstance(e, SessionStarted)]
        self.assertEqual(reasons, ["select", "manual"])

    def test_config_edit_mid_run_keeps_snapshot(self):
        """진행 중 설정이 바뀌어도 현재 실행은 기존 순서를 사용"""
        self.station.select_sku("X1")
        self.station.submit_scan("1234")
        self.store.add_barcode("X1", "Extra", r'^E')

        event = self.station.submit_scan("L-1")
        self.assertIsInstance(event, RunCompleted)
        self.assertEqual(event.session.field_names, ["Serial", "Lot"])

    def test_reload_configuration_updates_delay(self):
        """설정 재로드 시 자동 재시작 시간 반영"""
        self.store.set_auto_restart_seconds(0)
        self.store.save()
        self.store.set_auto_restart_seconds(9)

        self.station.reload_configuration()

        self.assertEqual(self.store.auto_restart_seconds, 0)
        self.assertEqual(self.station.scheduler.delay_seconds, 0)
        self._complete_run()
        self.assertEqual(self.root.pending_jobs, 0)

    def test_deselect(self):
        """빈 값 선택 시 선택 해제"""
        self.station.select_sku("X1")
        self.station.select_sku("")
        self.assertIsNone(self.station.current_sku_id)
        self.assertEqual(self.station.sequencer.state, SequencerState.IDLE)
        self.assertEqual(self.station.todays_pass_count(), 0)


class TestStationEventLogging(unittest.TestCase):
    """스테이션 이벤트 로그 테스트"""

    def setUp(self):
        """테스트 시작 전 설정"""
        self.temp_dir = tempfile.mkdtemp()
        self.logger = EventLogger(os.path.join(self.temp_dir, "logs", "events.csv"))
        store = ConfigStore(search_dirs=[])
        store.add_sku("X1")
        store.add_barcode("X1", "Code", r'^\d{4}$')
        self.station = VerificationStation(store, RunRecorder(os.path.join(self.temp_dir, "records")),
                                           FakeRoot(), event_logger=self.logger)

    def tearDown(self):
        """테스트 종료 후 정리"""
        self.logger.stop_logger()
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_events_are_logged(self):
        """세션 시작, 스캔 결과, 완료, 기록 저장이 로그에 남음"""
        self.station.select_sku("X1")
        self.station.submit_scan("12a4")
        self.station.submit_scan("1234")
        self.logger.flush()

        types = [log['event_type'] for log in self.logger.get_todays_logs()]
        self.assertEqual(types, ['SESSION_STARTED', 'SCAN_REJECTED', 'RUN_COMPLETED', 'RECORD_SAVED'])

        logs = self.logger.get_todays_logs()
        self.assertEqual(logs[1]['detail']['expected_pattern'], r'^\d{4}$')
        self.assertEqual(logs[2]['detail']['values'], ['1234'])


if __name__ == '__main__':
    unittest.main()
