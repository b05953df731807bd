"""바코드 정규식 패턴 컴파일 모듈

패턴은 설정 시점에 컴파일합니다. 스캔 시점에는 이미 컴파일된 Matcher만 사용합니다.
"""

import re
from typing import Optional

from ..utils.exceptions import InvalidPatternError


class Matcher:
    """컴파일된 바코드 패턴"""

    __slots__ = ('pattern', '_regex')

    def __init__(self, pattern: str, regex: 're.Pattern'):
        self.pattern = pattern
        self._regex = regex

    def test(self, text: str) -> bool:
        """입력이 패턴과 일치하는지 검사합니다. 앵커가 없는 패턴은 부분 일치를 허용합니다."""
        return self._regex.search(text) is not None

    def __eq__(self, other):
        return isinstance(other, Matcher) and other.pattern == self.pattern

    def __hash__(self):
        return hash(self.pattern)

    def __repr__(self):
        return f"Matcher({self.pattern!r})"


def compile_pattern(pattern: str) -> Matcher:
    """패턴 문자열을 Matcher로 컴파일합니다. 실패하면 InvalidPatternError를 발생시킵니다."""
    if not isinstance(pattern, str):
        raise InvalidPatternError(str(pattern), "패턴은 문자열이어야 합니다")
    try:
        regex = re.compile(pattern)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e
    return Matcher(pattern, regex)


def validate_pattern(pattern: str) -> Optional[str]:
    """입력 폼용 검증. 오류 메시지를 반환하고, 유효하면 None을 반환합니다."""
    try:
        compile_pattern(pattern)
    except InvalidPatternError as e:
        return e.reason
    return None
