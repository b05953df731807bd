"""파일 처리 유틸리티 모듈"""

import os
import re
import sys


USER_DATA_DIRNAME = '.barcode_verification'


def source_root() -> str:
    """패키지를 담고 있는 디렉토리 (소스 체크아웃이면 프로젝트 루트)"""
    return os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def user_data_path() -> str:
    return os.path.join(os.path.expanduser('~'), USER_DATA_DIRNAME)


def application_path() -> str:
    """설정과 기록을 저장할 디렉토리를 반환합니다.

    실행 파일이면 실행 파일 위치, 소스 체크아웃이면 프로젝트 루트,
    pip로 설치된 경우에는 사용자 데이터 폴더입니다.
    """
    if getattr(sys, 'frozen', False):
        return os.path.dirname(sys.executable)
    root = source_root()
    if os.path.exists(os.path.join(root, 'pyproject.toml')):
        return root
    # site-packages 아래에는 쓰지 않음
    data_dir = user_data_path()
    ensure_directory_exists(data_dir)
    return data_dir


def resource_path(relative_path: str) -> str:
    """ PyInstaller로 패키징했을 때의 리소스 경로를 가져옵니다. """
    try:
        base_path = sys._MEIPASS
    except AttributeError:
        base_path = source_root()
    return os.path.join(base_path, relative_path)


def ensure_directory_exists(directory_path: str) -> bool:
    """디렉토리가 없으면 생성합니다."""
    try:
        if not os.path.exists(directory_path):
            os.makedirs(directory_path, exist_ok=True)
        return True
    except OSError as e:
        print(f"디렉토리 생성 실패: {e}")
        return False


def file_has_content(file_path: str) -> bool:
    """파일이 존재하고 비어 있지 않은지 확인합니다."""
    return os.path.exists(file_path) and os.stat(file_path).st_size > 0


def get_safe_filename(filename: str) -> str:
    """파일명에서 안전하지 않은 문자를 제거합니다."""
    # 파일명에 사용할 수 없는 문자들을 언더스코어로 대체
    safe_name = re.sub(r'[<>:"/\\|?*]', '_', filename)
    return safe_name.strip()
