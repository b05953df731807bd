"""데이터 모델 테스트"""

import unittest
import datetime
import sys
import os

# 상위 디렉토리의 모듈들을 import 하기 위해 경로 추가
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from barcode_station.core.models import BarcodeSpec, SkuDefinition, ScanSession, RunRecord
from barcode_station.utils.exceptions import InvalidPatternError


class TestBarcodeSpec(unittest.TestCase):
    """BarcodeSpec 모델 테스트"""

    def test_pattern_compiled_on_creation(self):
        """생성 시점에 패턴이 컴파일됨"""
        spec = BarcodeSpec(name="Serial", pattern=r'^\d+$')
        self.assertTrue(spec.matcher.test('123'))
        self.assertFalse(spec.matcher.test('12a'))

    def test_invalid_pattern_rejected_on_creation(self):
        """잘못된 패턴은 생성 단계에서 거부"""
        with self.assertRaises(InvalidPatternError):
            BarcodeSpec(name="Bad", pattern='(')

    def test_to_dict(self):
        """설정 파일 형식으로 변환"""
        spec = BarcodeSpec(name="Lot", pattern='^L')
        self.assertEqual(spec.to_dict(), {'name': 'Lot', 'regex': '^L'})


class TestSkuDefinition(unittest.TestCase):
    """SkuDefinition 모델 테스트"""

    def test_sequence_is_tuple(self):
        """순서는 변경 불가능한 튜플로 저장"""
        sku = SkuDefinition(id="X1", sequence=[BarcodeSpec("A", "^A")])
        self.assertIsInstance(sku.sequence, tuple)
        self.assertEqual(sku.field_names, ["A"])

    def test_eligibility(self):
        """바코드가 있어야 선택 가능"""
        self.assertFalse(SkuDefinition(id="EMPTY").is_eligible)
        self.assertTrue(SkuDefinition(id="X1", sequence=(BarcodeSpec("A", "^A"),)).is_eligible)


class TestScanSession(unittest.TestCase):
    """ScanSession 모델 테스트"""

    def setUp(self):
        """테스트 시작 전 설정"""
        self.sequence = (BarcodeSpec("A", "^A"), BarcodeSpec("B", "^B"))
        self.session = ScanSession(sku_id="X1", sequence=self.sequence)

    def test_default_values(self):
        """기본값 설정 테스트"""
        self.assertEqual(self.session.position, 0)
        self.assertEqual(self.session.accumulated_values, [])
        self.assertFalse(self.session.is_complete)
        self.assertEqual(self.session.current_spec.name, "A")

    def test_complete_state(self):
        """position이 길이와 같으면 완료"""
        self.session.position = 2
        self.assertTrue(self.session.is_complete)
        self.assertIsNone(self.session.current_spec)


class TestRunRecord(unittest.TestCase):
    """RunRecord 모델 테스트"""

    def test_from_session(self):
        """완료 세션에서 기록 생성"""
        session = ScanSession(sku_id="X1", sequence=(BarcodeSpec("A", r'^\d+$'), BarcodeSpec("B", '^[A-Z]+$')))
        session.accumulated_values.extend(["123", "ABC"])
        session.position = 2

        record = RunRecord.from_session(session, datetime.datetime(2024, 1, 15, 9, 5, 7))

        self.assertEqual(record.date, "2024_01_15")
        self.assertEqual(record.time, "09:05:07")
        self.assertEqual(record.header_row(), ['SKU', 'Date', 'Time', 'A', 'B'])
        self.assertEqual(record.data_row(), ['X1', '2024_01_15', '09:05:07', '123', 'ABC'])

    def test_record_values_are_copied(self):
        """기록 생성 후 세션 값이 바뀌어도 기록은 그대로"""
        session = ScanSession(sku_id="X1", sequence=(BarcodeSpec("A", '^A'),))
        session.accumulated_values.append("A1")
        record = RunRecord.from_session(session)
        session.accumulated_values.append("A2")
        self.assertEqual(record.values, ("A1",))


if __name__ == '__main__':
    unittest.main()
