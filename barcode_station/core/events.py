"""스캔 순서 검증 이벤트 정의"""

from dataclasses import dataclass
from typing import Optional

from .models import BarcodeSpec, ScanSession
from ..utils.exceptions import RecordWriteError


@dataclass(frozen=True)
class SessionStarted:
    session: ScanSession
    reason: str = "select"  # select / manual / auto


@dataclass(frozen=True)
class SessionCleared:
    sku_id: Optional[str] = None


@dataclass(frozen=True)
class StepAccepted:
    session: ScanSession
    position: int
    value: str
    spec: BarcodeSpec


@dataclass(frozen=True)
class StepRejected:
    session: ScanSession
    position: int
    value: str
    spec: BarcodeSpec


@dataclass(frozen=True)
class RunCompleted(StepAccepted):
    """마지막 단계가 일치하여 실행이 완료됨. 마지막 단계의 승인도 함께 나타냅니다."""


@dataclass(frozen=True)
class RecordSaved:
    session: ScanSession
    path: str


@dataclass(frozen=True)
class RecordWriteFailed:
    session: ScanSession
    error: RecordWriteError
