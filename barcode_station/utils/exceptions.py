"""커스텀 예외 클래스들"""


class VerificationError(Exception):
    """바코드 검증 시스템의 기본 예외 클래스"""
    pass


class ConfigurationError(VerificationError):
    """설정 관련 오류"""
    pass


class InvalidPatternError(ConfigurationError):
    """정규식 패턴 컴파일 실패"""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"잘못된 정규식 패턴 '{pattern}': {reason}")


class ValidationError(VerificationError):
    """입력값 검증 오류 (빈 이름, 중복 SKU 등)"""
    pass


class FileHandlingError(VerificationError):
    """파일 처리 관련 오류"""
    pass


class RecordWriteError(FileHandlingError):
    """검증 기록 저장 실패. 검증 결과 자체는 유효합니다."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"기록 저장 실패 ({path}): {reason}")


class BarcodeError(VerificationError):
    """바코드 입력 관련 오류"""
    pass


class EmptyScanError(BarcodeError):
    """공백을 제거한 스캔 입력이 비어 있음"""

    def __init__(self):
        super().__init__("바코드를 스캔해주세요.")


class SessionError(VerificationError):
    """세션 관리 관련 오류"""
    pass


class EmptySequenceError(SessionError):
    """바코드 패턴이 하나도 없는 SKU를 선택함"""

    def __init__(self, sku_id: str):
        self.sku_id = sku_id
        super().__init__(f"SKU '{sku_id}'에 등록된 바코드가 없습니다.")


class InvalidStateError(SessionError):
    """현재 상태에서 허용되지 않는 명령"""
    informational = False


class RunAlreadyCompleteError(InvalidStateError):
    """이미 모든 바코드가 검증된 상태에서 다시 스캔함"""
    informational = True

    def __init__(self):
        super().__init__("모든 바코드가 이미 검증되었습니다. 다시 시작을 눌러주세요.")
