"""애플리케이션 설정 관리 모듈"""

import copy
import json
import os
from typing import Dict, Any, Optional

from .file_handler import application_path

DEFAULT_SETTINGS: Dict[str, Any] = {
    "app": {
        "name": "Barcode Verifier",
        "version": "v1.0.0",
        "description": "바코드 순차 검증 시스템"
    },
    "station": {
        "config_file": "barcode_verification_config.json",
        "records_folder": "records"
    },
    "ui": {
        "window_title": "바코드 검증 스테이션",
        "window_geometry": "1400x900",
        "status_message_ms": 5000
    },
    "sound": {
        "enabled": True
    },
    "logging": {
        "enabled": True,
        "log_file": "logs/station_event_log.csv"
    }
}


class ConfigManager:
    """애플리케이션 설정을 관리하는 클래스"""

    def __init__(self, config_file: str = "app_settings.json", base_dir: Optional[str] = None):
        self.config_file = config_file
        self.base_dir = base_dir or application_path()
        self.config = self._load_config()

    @property
    def config_path(self) -> str:
        return os.path.join(self.base_dir, self.config_file)

    def _load_config(self) -> Dict[str, Any]:
        """설정 파일을 로드합니다."""
        try:
            if os.path.exists(self.config_path):
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    return json.load(f)
            else:
                # 기본 설정 생성
                return self._create_default_config()
        except (OSError, json.JSONDecodeError) as e:
            print(f"설정 파일 로드 오류: {e}")
            return copy.deepcopy(DEFAULT_SETTINGS)

    def _create_default_config(self) -> Dict[str, Any]:
        """기본 설정을 생성합니다."""
        default_config = copy.deepcopy(DEFAULT_SETTINGS)
        self.save_config(default_config)
        return default_config

    def get(self, key_path: str, default=None):
        """점 표기법으로 설정값을 가져옵니다. 예: 'app.version'"""
        keys = key_path.split('.')
        value = self.config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key_path: str, value):
        """점 표기법으로 설정값을 설정합니다."""
        keys = key_path.split('.')
        config = self.config

        for key in keys[:-1]:
            if key not in config:
                config[key] = {}
            config = config[key]

        config[keys[-1]] = value

    def resolve_path(self, key_path: str, default: str) -> str:
        """설정값이 상대 경로이면 기준 디렉토리 아래의 절대 경로로 바꿉니다."""
        path = self.get(key_path, default)
        if os.path.isabs(path):
            return path
        return os.path.join(self.base_dir, path)

    def save_config(self, config_data=None) -> bool:
        """설정을 파일로 저장합니다."""
        data = config_data if config_data is not None else self.config
        try:
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=4, ensure_ascii=False)
            return True
        except OSError as e:
            print(f"설정 파일 저장 오류: {e}")
            return False
