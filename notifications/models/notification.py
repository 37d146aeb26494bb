from dataclasses import dataclass
from typing import Literal, Optional

Severity = Literal['info', 'success', 'error']

SEVERITIES = ('info', 'success', 'error')
DEFAULT_TOAST_DURATION_MS = 3000


@dataclass
class Notification:
    message: str
    severity: Severity = 'info'
    title: str = ''
    source: str = 'Certificates'
    toast_duration_ms: Optional[int] = None

    def __post_init__(self) -> None:
        if self.severity not in SEVERITIES:
            self.severity = 'info'
