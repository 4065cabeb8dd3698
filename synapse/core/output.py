"""출력 모델

코어는 화면에 직접 쓰지 않는다. 모든 텍스트는 OutputLine으로 모이고,
색상/타자 지연/글리치는 표현 계층(cli)이 LineKind를 보고 결정한다.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class LineKind(str, Enum):
    """출력 줄 종류"""

    ROOM = "room"  # 방 이름 헤더
    NARRATION = "narration"  # 묘사 (타자 효과 대상)
    OBJECTS = "objects"
    EXITS = "exits"
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    SYNAPSE = "synapse"  # SYNAPSE 발화 (타자 효과 대상)
    TERMINAL = "terminal"
    AMBIENT = "ambient"
    STATE = "state"  # 매 턴 상태 디버그 줄
    ENDING = "ending"
    GUIDE = "guide"  # 도움말/레퍼런스 본문
    CLEAR = "clear"  # 화면 지우기 제어 줄 (텍스트 없음)


@dataclass
class OutputLine:
    text: str
    kind: LineKind = LineKind.INFO


@dataclass
class ActionResult:
    """행동 결과

    outcome은 각 행동의 결과 enum 값 (예: MoveOutcome.LOCKED).
    """

    success: bool
    action_type: str
    outcome: Any
    lines: list[OutputLine] = field(default_factory=list)
    data: Optional[dict] = None
