"""검증 완료 기록 CSV 저장 모듈"""

import csv
import os
from typing import Optional

from .models import RunRecord
from ..utils.exceptions import RecordWriteError
from ..utils.file_handler import ensure_directory_exists, file_has_content, get_safe_filename


class RunRecorder:
    """완료된 실행을 SKU/날짜별 CSV 파일에 추가합니다.

    파일이 없으면 헤더(SKU, Date, Time, 패턴 이름들)를 먼저 기록합니다.
    파일은 외부에서 삭제되거나 공유될 수 있으므로 매번 존재 여부를 확인합니다.
    """

    def __init__(self, records_folder: str):
        self.records_folder = records_folder

    def destination_for(self, sku_id: str, date: str) -> str:
        filename = get_safe_filename(f"{sku_id}_{date}.csv")
        return os.path.join(self.records_folder, filename)

    def record(self, run: RunRecord) -> str:
        """기록 한 줄을 추가하고 저장한 파일 경로를 반환합니다."""
        path = self.destination_for(run.sku_id, run.date)
        if not ensure_directory_exists(self.records_folder):
            raise RecordWriteError(path, "기록 폴더를 만들 수 없습니다")

        try:
            is_new_file = not file_has_content(path)
            with open(path, 'a', newline='', encoding='utf-8') as f:
                writer = csv.writer(f, lineterminator='\n')
                if is_new_file:
                    writer.writerow(run.header_row())
                writer.writerow(run.data_row())
        except (OSError, csv.Error) as e:
            raise RecordWriteError(path, str(e)) from e
        return path

    def count_records(self, sku_id: str, date: str) -> int:
        """해당 SKU/날짜 파일의 데이터 행 수를 반환합니다."""
        path = self.destination_for(sku_id, date)
        if not os.path.exists(path):
            return 0
        try:
            with open(path, 'r', newline='', encoding='utf-8') as f:
                rows = [row for row in csv.reader(f) if row]
        except (OSError, csv.Error) as e:
            print(f"기록 파일 읽기 오류: {e}")
            return 0
        return max(len(rows) - 1, 0)

    def read_records(self, sku_id: str, date: str) -> Optional[list]:
        """해당 파일의 모든 행(헤더 포함)을 반환합니다. 파일이 없으면 None."""
        path = self.destination_for(sku_id, date)
        if not os.path.exists(path):
            return None
        with open(path, 'r', newline='', encoding='utf-8') as f:
            return [row for row in csv.reader(f) if row]
