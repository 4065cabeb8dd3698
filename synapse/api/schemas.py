"""API request/response schemas."""

from typing import Optional

from pydantic import BaseModel, Field


# 줄바꿈/제어 문자는 저장 슬롯 텍스트를 깨뜨린다
PLAYER_NAME_PATTERN = r"^[^\x00-\x1f\x7f-\x9f\u2028\u2029]+$"


# === Request Schemas ===


class StartRequest(BaseModel):
    """세션 시작 요청"""

    player_name: str = Field(
        ...,
        min_length=1,
        max_length=50,
        pattern=PLAYER_NAME_PATTERN,
        description="플레이어 이름 (저장 슬롯 키)",
    )
    seed: Optional[int] = Field(None, description="난수 시드 (재현용)")
    load: bool = Field(False, description="저장 슬롯에서 이어하기")


class CommandRequest(BaseModel):
    """자유 입력 명령 요청"""

    session_id: str = Field(..., description="세션 ID")
    text: str = Field(..., max_length=500, description="플레이어 입력 한 줄")


class DialogueRequest(BaseModel):
    """대화 선택 요청"""

    session_id: str = Field(..., description="세션 ID")
    choice: int = Field(..., ge=0, description="0 = 뒤로 가기, 1..N = 선택지 번호")


# === Response Schemas ===


class OutputLineInfo(BaseModel):
    """출력 줄"""

    text: str
    kind: str


class SessionState(BaseModel):
    """세션 상태"""

    player_name: str
    current_room: str
    inventory: list[str] = []
    awareness: int
    sanity: int
    turn_count: int
    tone: str
    glitch_mode: bool
    lockdown: bool
    options: list[str] = []
    can_go_back: bool = False
    ended: bool = False
    ending: Optional[str] = None


class StartResponse(BaseModel):
    """세션 시작 응답"""

    session_id: str
    loaded: bool = False
    lines: list[OutputLineInfo] = []
    state: SessionState


class TurnResponse(BaseModel):
    """턴 처리 응답"""

    turn: int
    lines: list[OutputLineInfo] = []
    response: Optional[str] = None
    state: SessionState


class DialogueResponse(BaseModel):
    """대화 선택 응답"""

    success: bool
    outcome: str
    lines: list[OutputLineInfo] = []
    state: SessionState


class TranscriptResponse(BaseModel):
    """대화 기록 응답"""

    session_id: str
    lines: list[str] = []


class ErrorResponse(BaseModel):
    """에러 응답"""

    success: bool = False
    error: str
    detail: Optional[str] = None
