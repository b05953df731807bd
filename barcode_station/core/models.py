"""데이터 모델 정의 모듈"""

from dataclasses import dataclass, field
from typing import List, Tuple, Optional
import datetime

from .patterns import Matcher, compile_pattern

RECORD_DATE_FORMAT = '%Y_%m_%d'
RECORD_TIME_FORMAT = '%H:%M:%S'


@dataclass(frozen=True)
class BarcodeSpec:
    """순서 안의 한 단계: 표시 이름과 정규식 패턴. 생성 시점에 패턴을 컴파일합니다."""
    name: str
    pattern: str
    matcher: Matcher = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'matcher', compile_pattern(self.pattern))

    def to_dict(self) -> dict:
        return {'name': self.name, 'regex': self.pattern}


@dataclass(frozen=True)
class SkuDefinition:
    """SKU 하나에 대한 바코드 스캔 순서"""
    id: str
    sequence: Tuple[BarcodeSpec, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'sequence', tuple(self.sequence))

    @property
    def is_eligible(self) -> bool:
        return len(self.sequence) > 0

    @property
    def field_names(self) -> List[str]:
        return [spec.name for spec in self.sequence]


@dataclass
class ScanSession:
    """한 번의 SKU 검증 실행을 관리합니다. 재시작 시 새 세션으로 교체됩니다."""
    sku_id: str
    sequence: Tuple[BarcodeSpec, ...]
    position: int = 0
    accumulated_values: List[str] = field(default_factory=list)
    started_at: datetime.datetime = field(default_factory=datetime.datetime.now)

    @property
    def is_complete(self) -> bool:
        return self.position >= len(self.sequence)

    @property
    def current_spec(self) -> Optional[BarcodeSpec]:
        if self.is_complete:
            return None
        return self.sequence[self.position]

    @property
    def field_names(self) -> List[str]:
        return [spec.name for spec in self.sequence]


@dataclass(frozen=True)
class RunRecord:
    """완료된 검증 결과 한 줄"""
    sku_id: str
    date: str
    time: str
    values: Tuple[str, ...]
    field_names: Tuple[str, ...]

    @classmethod
    def from_session(cls, session: ScanSession, when: Optional[datetime.datetime] = None) -> 'RunRecord':
        when = when or datetime.datetime.now()
        return cls(
            sku_id=session.sku_id,
            date=when.strftime(RECORD_DATE_FORMAT),
            time=when.strftime(RECORD_TIME_FORMAT),
            values=tuple(session.accumulated_values),
            field_names=tuple(session.field_names),
        )

    def header_row(self) -> List[str]:
        return ['SKU', 'Date', 'Time', *self.field_names]

    def data_row(self) -> List[str]:
        return [self.sku_id, self.date, self.time, *self.values]
