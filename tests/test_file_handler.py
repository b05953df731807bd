"""파일 핸들러 유틸리티 테스트"""

import unittest
import tempfile
import shutil
import os
import sys
from unittest.mock import patch

# 상위 디렉토리의 모듈들을 import 하기 위해 경로 추가
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from barcode_station.utils.file_handler import (application_path, ensure_directory_exists, file_has_content,
                                                get_safe_filename, resource_path)


class TestFileHandler(unittest.TestCase):
    """파일 핸들러 유틸리티 함수 테스트"""

    def setUp(self):
        """테스트 시작 전 설정"""
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        """테스트 종료 후 정리"""
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_application_path_is_project_root(self):
        """개발 환경에서는 프로젝트 루트 반환"""
        root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        self.assertEqual(application_path(), root)
        self.assertEqual(resource_path(os.path.join('assets', 'success.wav')),
                         os.path.join(root, 'assets', 'success.wav'))

    def test_installed_package_uses_user_data_directory(self):
        """설치된 패키지(프로젝트 루트가 아닌 위치)에서는 사용자 데이터 폴더 사용"""
        site_packages = os.path.join(self.temp_dir, "site-packages")
        os.makedirs(site_packages)
        data_dir = os.path.join(self.temp_dir, "home", ".barcode_verification")

        with patch("barcode_station.utils.file_handler.source_root", return_value=site_packages), \
                patch("barcode_station.utils.file_handler.user_data_path", return_value=data_dir):
            path = application_path()

        self.assertEqual(path, data_dir)
        self.assertTrue(os.path.isdir(data_dir))
        self.assertFalse(path.startswith(site_packages))

    def test_ensure_directory_exists_new_directory(self):
        """새 디렉토리 생성 테스트"""
        new_dir = os.path.join(self.temp_dir, "new_directory")
        self.assertFalse(os.path.exists(new_dir))

        result = ensure_directory_exists(new_dir)
        self.assertTrue(result)
        self.assertTrue(os.path.exists(new_dir))

    def test_ensure_directory_exists_existing_directory(self):
        """기존 디렉토리 테스트"""
        result = ensure_directory_exists(self.temp_dir)
        self.assertTrue(result)
        self.assertTrue(os.path.exists(self.temp_dir))

    def test_ensure_directory_exists_nested_directory(self):
        """중첩 디렉토리 생성 테스트"""
        nested_dir = os.path.join(self.temp_dir, "level1", "level2", "level3")
        self.assertFalse(os.path.exists(nested_dir))

        result = ensure_directory_exists(nested_dir)
        self.assertTrue(result)
        self.assertTrue(os.path.exists(nested_dir))

    def test_ensure_directory_exists_blocked_by_file(self):
        """같은 이름의 파일이 있으면 생성 실패"""
        blocker = os.path.join(self.temp_dir, "blocker")
        with open(blocker, 'w') as f:
            f.write("x")
        self.assertFalse(ensure_directory_exists(os.path.join(blocker, "child")))

    def test_file_has_content(self):
        """존재하고 비어 있지 않은 파일만 True"""
        path = os.path.join(self.temp_dir, "records.csv")
        self.assertFalse(file_has_content(path))

        open(path, 'w').close()
        self.assertFalse(file_has_content(path))

        with open(path, 'w') as f:
            f.write("SKU,Date,Time\n")
        self.assertTrue(file_has_content(path))

    def test_get_safe_filename_normal_filename(self):
        """일반 파일명 테스트"""
        filename = "X1_2024_01_15.csv"
        safe_name = get_safe_filename(filename)
        self.assertEqual(safe_name, filename)

    def test_get_safe_filename_unsafe_characters(self):
        """안전하지 않은 문자 포함 파일명 테스트"""
        unsafe_filename = "file<>:\"/\\|?*.txt"
        safe_name = get_safe_filename(unsafe_filename)

        # 안전하지 않은 문자들이 언더스코어로 대체되었는지 확인
        unsafe_chars = '<>:"/\\|?*'
        for char in unsafe_chars:
            self.assertNotIn(char, safe_name)

        # 확장자는 유지되어야 함
        self.assertTrue(safe_name.endswith('.txt'))

    def test_get_safe_filename_with_spaces(self):
        """공백 포함 파일명 테스트"""
        safe_name = get_safe_filename("  file with spaces  .txt  ")

        # 앞뒤 공백이 제거되었는지 확인
        self.assertFalse(safe_name.startswith(' '))
        self.assertFalse(safe_name.endswith(' '))
        self.assertTrue('file with spaces' in safe_name)


if __name__ == '__main__':
    unittest.main()
