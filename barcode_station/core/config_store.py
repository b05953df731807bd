"""스테이션 설정 저장소

SKU별 바코드 순서, 스테이션 제목, 자동 재시작 시간을 JSON 파일로 관리합니다.

    {
        "stationTitle": "...",
        "skus": {"SKU_ID": {"barcodes": [{"name": "...", "regex": "..."}]}},
        "autoRestartSeconds": 0
    }
"""

import json
import math
import os
from typing import Any, Dict, List, Optional

from .models import BarcodeSpec, SkuDefinition
from ..utils.exceptions import ConfigurationError, InvalidPatternError, ValidationError
from ..utils.file_handler import application_path, ensure_directory_exists, user_data_path

CONFIG_FILENAME = 'barcode_verification_config.json'


def default_search_dirs() -> List[str]:
    """설정 파일 탐색 순서: 실행 파일 위치, 현재 작업 디렉토리, 사용자 데이터 폴더"""
    dirs = [application_path(), os.getcwd(), user_data_path()]
    unique = []
    for d in dirs:
        if d not in unique:
            unique.append(d)
    return unique


def normalize_sku_id(sku_id: str) -> str:
    return (sku_id or "").strip().upper()


def whole_number(value: Any) -> Optional[int]:
    """정수로 표현되는 값(10, 10.0, "10")을 int로 변환합니다. 그 외에는 None."""
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or value != int(value):
        return None
    return int(value)


def _parse_auto_restart(value: Any) -> int:
    if value is None:
        return 0
    seconds = whole_number(value) if not isinstance(value, str) else None
    if seconds is None:
        raise ConfigurationError(f"autoRestartSeconds 값이 올바르지 않습니다: {value!r}")
    if seconds < 0:
        raise ConfigurationError("autoRestartSeconds는 0 이상이어야 합니다.")
    return seconds


def _parse_barcode(sku_id: str, index: int, entry: Any) -> BarcodeSpec:
    if not isinstance(entry, dict):
        raise ConfigurationError(f"SKU '{sku_id}'의 {index + 1}번째 바코드 형식이 올바르지 않습니다.")
    name = str(entry.get('name', '')).strip()
    regex = entry.get('regex', '')
    if not name:
        raise ConfigurationError(f"SKU '{sku_id}'의 {index + 1}번째 바코드 이름이 비어 있습니다.")
    if not isinstance(regex, str) or not regex.strip():
        raise ConfigurationError(f"SKU '{sku_id}'의 바코드 '{name}' 정규식 패턴이 비어 있습니다.")
    try:
        return BarcodeSpec(name=name, pattern=regex.strip())
    except InvalidPatternError as e:
        raise ConfigurationError(f"SKU '{sku_id}'의 바코드 '{name}': {e}") from e


def parse_config(data: Any) -> Dict[str, Any]:
    """설정 문서를 검증하고 SkuDefinition으로 변환합니다."""
    if not isinstance(data, dict):
        raise ConfigurationError("설정 파일의 최상위는 객체여야 합니다.")

    skus_data = data.get('skus', {}) or {}
    if not isinstance(skus_data, dict):
        raise ConfigurationError("'skus' 항목은 객체여야 합니다.")

    skus: Dict[str, SkuDefinition] = {}
    for raw_id, sku_data in skus_data.items():
        sku_id = normalize_sku_id(raw_id)
        if not sku_id:
            raise ConfigurationError("비어 있는 SKU 코드가 있습니다.")
        if sku_id in skus:
            raise ConfigurationError(f"중복된 SKU 코드: {sku_id}")
        barcodes = (sku_data or {}).get('barcodes', []) if isinstance(sku_data, dict) else None
        if not isinstance(barcodes, list):
            raise ConfigurationError(f"SKU '{sku_id}'의 'barcodes' 항목은 목록이어야 합니다.")
        sequence = [_parse_barcode(sku_id, i, entry) for i, entry in enumerate(barcodes)]
        skus[sku_id] = SkuDefinition(id=sku_id, sequence=tuple(sequence))

    return {
        'station_title': str(data.get('stationTitle', '') or ''),
        'skus': skus,
        'auto_restart_seconds': _parse_auto_restart(data.get('autoRestartSeconds', 0)),
    }


class ConfigStore:
    """SKU 설정을 읽고 편집하고 저장합니다."""

    def __init__(self, config_path: Optional[str] = None, search_dirs: Optional[List[str]] = None,
                 filename: str = CONFIG_FILENAME):
        self.config_path = config_path
        self.filename = filename
        self.search_dirs = search_dirs if search_dirs is not None else default_search_dirs()
        self.station_title = ""
        self.auto_restart_seconds = 0
        self.skus: Dict[str, SkuDefinition] = {}
        self.source: Optional[str] = None

    # ------------------------------------------------------------------
    # 파일 입출력
    # ------------------------------------------------------------------

    def locate_config(self) -> Optional[str]:
        """탐색 순서대로 처음 발견되는 설정 파일 경로를 반환합니다."""
        if self.config_path and os.path.exists(self.config_path):
            return self.config_path
        for directory in self.search_dirs:
            candidate = os.path.join(directory, self.filename)
            if os.path.exists(candidate):
                return candidate
        return None

    def load(self, path: Optional[str] = None) -> str:
        """설정 파일을 읽습니다. 읽은 파일 경로를 반환합니다."""
        path = path or self.locate_config()
        if not path:
            raise ConfigurationError("설정 파일을 찾을 수 없습니다. 먼저 설정을 저장해주세요.")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"설정 파일 형식 오류 ({path}): {e}") from e
        except OSError as e:
            raise ConfigurationError(f"설정 파일 읽기 오류 ({path}): {e}") from e

        self.apply(data)
        self.source = path
        self.config_path = path
        return path

    def apply(self, data: Dict[str, Any]):
        """설정 문서를 검증한 뒤 현재 설정을 교체합니다. 검증에 실패하면 기존 설정이 유지됩니다."""
        parsed = parse_config(data)
        self.station_title = parsed['station_title']
        self.skus = parsed['skus']
        self.auto_restart_seconds = parsed['auto_restart_seconds']

    def to_dict(self) -> Dict[str, Any]:
        return {
            'stationTitle': self.station_title,
            'skus': {
                sku_id: {'barcodes': [spec.to_dict() for spec in sku.sequence]}
                for sku_id, sku in self.skus.items()
            },
            'autoRestartSeconds': self.auto_restart_seconds,
        }

    def _default_save_path(self) -> str:
        if self.config_path:
            return self.config_path
        base_dir = self.search_dirs[0] if self.search_dirs else application_path()
        return os.path.join(base_dir, self.filename)

    def _write(self, path: str):
        directory = os.path.dirname(path)
        if directory and not ensure_directory_exists(directory):
            raise ConfigurationError(f"설정 폴더를 만들 수 없습니다: {directory}")
        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigurationError(f"설정 저장 오류 ({path}): {e}") from e

    def save(self, path: Optional[str] = None) -> str:
        path = path or self._default_save_path()
        self._write(path)
        self.config_path = path
        return path

    def export_to(self, path: str) -> str:
        """현재 설정을 다른 위치로 내보냅니다. 기본 저장 위치는 바뀌지 않습니다."""
        self._write(path)
        return path

    def import_from(self, path: str) -> str:
        """다른 위치의 설정 파일을 가져옵니다. 저장은 save()를 호출해야 반영됩니다."""
        current_path = self.config_path
        self.load(path)
        self.config_path = current_path
        return path

    # ------------------------------------------------------------------
    # 조회
    # ------------------------------------------------------------------

    def get_sku(self, sku_id: str) -> Optional[SkuDefinition]:
        return self.skus.get(normalize_sku_id(sku_id))

    def get_eligible_skus(self) -> List[SkuDefinition]:
        """바코드가 하나 이상 등록된 SKU만 반환합니다."""
        return [sku for sku in self.skus.values() if sku.is_eligible]

    # ------------------------------------------------------------------
    # 편집
    # ------------------------------------------------------------------

    def _require_sku(self, sku_id: str) -> SkuDefinition:
        sku = self.get_sku(sku_id)
        if sku is None:
            raise ValidationError(f"SKU '{sku_id}'를 찾을 수 없습니다.")
        return sku

    def set_station_title(self, title: str):
        self.station_title = (title or "").strip()

    def set_auto_restart_seconds(self, seconds: Any):
        value = whole_number(seconds)
        if value is None:
            raise ValidationError(f"자동 재시작 시간은 정수여야 합니다: {seconds!r}")
        if value < 0:
            raise ValidationError("자동 재시작 시간은 0 이상이어야 합니다.")
        self.auto_restart_seconds = value

    def add_sku(self, sku_id: str) -> SkuDefinition:
        normalized = normalize_sku_id(sku_id)
        if not normalized:
            raise ValidationError("SKU 코드를 입력해주세요.")
        if normalized in self.skus:
            raise ValidationError(f"SKU '{normalized}'는 이미 존재합니다.")
        sku = SkuDefinition(id=normalized)
        self.skus[normalized] = sku
        return sku

    def delete_sku(self, sku_id: str):
        sku = self._require_sku(sku_id)
        del self.skus[sku.id]

    def add_barcode(self, sku_id: str, name: str, regex: str) -> BarcodeSpec:
        sku = self._require_sku(sku_id)
        name = (name or "").strip()
        regex = (regex or "").strip()
        if not name or not regex:
            raise ValidationError("바코드 이름과 정규식 패턴을 모두 입력해주세요.")
        spec = BarcodeSpec(name=name, pattern=regex)
        self.skus[sku.id] = SkuDefinition(id=sku.id, sequence=sku.sequence + (spec,))
        return spec

    def delete_barcode(self, sku_id: str, index: int):
        sku = self._require_sku(sku_id)
        if not 0 <= index < len(sku.sequence):
            raise ValidationError(f"바코드 순번이 범위를 벗어났습니다: {index}")
        sequence = list(sku.sequence)
        del sequence[index]
        self.skus[sku.id] = SkuDefinition(id=sku.id, sequence=tuple(sequence))

    def move_barcode(self, sku_id: str, from_index: int, to_index: int):
        """바코드 순서를 변경합니다."""
        sku = self._require_sku(sku_id)
        size = len(sku.sequence)
        if not (0 <= from_index < size and 0 <= to_index < size):
            raise ValidationError("바코드 순번이 범위를 벗어났습니다.")
        sequence = list(sku.sequence)
        sequence.insert(to_index, sequence.pop(from_index))
        self.skus[sku.id] = SkuDefinition(id=sku.id, sequence=tuple(sequence))
