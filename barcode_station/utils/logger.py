"""로깅 유틸리티 모듈"""

import csv
import json
import datetime
import os
import queue
import threading
from typing import Dict, Any, Optional, List

from .file_handler import ensure_directory_exists, file_has_content

LOG_FIELDNAMES = ['timestamp', 'event_type', 'detail']


class EventLogger:
    """스테이션 이벤트 로깅을 담당하는 클래스"""

    def __init__(self, log_file_path: str, enabled: bool = True):
        self.log_file_path = log_file_path
        self.enabled = enabled
        self.log_queue: queue.Queue = queue.Queue()
        self.log_writer_running = True
        self._log_thread = self._start_log_writer_thread()

    def _start_log_writer_thread(self) -> threading.Thread:
        """로그 작성 스레드를 시작합니다."""
        log_thread = threading.Thread(target=self._event_log_writer, daemon=True)
        log_thread.start()
        return log_thread

    def _event_log_writer(self):
        """이벤트 로그를 파일에 작성하는 스레드 함수"""
        while self.log_writer_running:
            try:
                log_entry = self.log_queue.get(timeout=1)
            except queue.Empty:
                continue

            try:
                if log_entry is None:
                    break
                self._write_entry(log_entry)
            except (OSError, csv.Error) as e:
                print(f"로그 작성 오류: {e}")
            finally:
                self.log_queue.task_done()

    def _write_entry(self, log_entry: Dict[str, str]):
        log_dir = os.path.dirname(self.log_file_path)
        if log_dir:
            ensure_directory_exists(log_dir)

        file_exists = file_has_content(self.log_file_path)
        with open(self.log_file_path, mode='a', newline='', encoding='utf-8') as csvfile:
            writer = csv.DictWriter(csvfile, fieldnames=LOG_FIELDNAMES)
            if not file_exists:
                writer.writeheader()
            writer.writerow(log_entry)
            csvfile.flush()

    def log_event(self, event_type: str, detail: Optional[Dict] = None):
        """이벤트를 로그에 기록합니다."""
        if not self.enabled:
            return
        log_entry = {
            'timestamp': datetime.datetime.now().strftime('%Y-%m-%d %H:%M:%S'),
            'event_type': event_type,
            'detail': json.dumps(detail, ensure_ascii=False) if detail else ""
        }
        self.log_queue.put(log_entry)

    def flush(self):
        """대기 중인 로그가 모두 기록될 때까지 기다립니다."""
        self.log_queue.join()

    def get_todays_logs(self) -> List[Dict[str, Any]]:
        """오늘 날짜의 모든 로그를 반환합니다."""
        today = datetime.date.today().strftime('%Y-%m-%d')
        logs = []

        if not os.path.exists(self.log_file_path):
            return logs

        try:
            with open(self.log_file_path, mode='r', encoding='utf-8') as csvfile:
                reader = csv.DictReader(csvfile)
                for row in reader:
                    if not row.get('timestamp', '').startswith(today):
                        continue
                    try:
                        detail = json.loads(row['detail']) if row['detail'] else {}
                    except json.JSONDecodeError:
                        continue
                    logs.append({
                        'timestamp': row['timestamp'],
                        'event_type': row['event_type'],
                        'detail': detail
                    })
            return logs
        except OSError as e:
            print(f"로그 파일 읽기 오류: {e}")
            return logs

    def count_todays_events(self, event_type: str) -> int:
        """오늘 기록된 특정 이벤트의 개수를 반환합니다."""
        return sum(1 for log in self.get_todays_logs() if log['event_type'] == event_type)

    def stop_logger(self, timeout: float = 1.0):
        """로깅을 중지합니다."""
        self.log_queue.put(None)  # 종료 신호
        self._log_thread.join(timeout=timeout)
        self.log_writer_running = False
