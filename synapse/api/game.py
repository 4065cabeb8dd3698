"""Game API endpoints."""

import random
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session, sessionmaker

from synapse.api.schemas import (
    CommandRequest,
    DialogueRequest,
    DialogueResponse,
    ErrorResponse,
    OutputLineInfo,
    SessionState,
    StartRequest,
    StartResponse,
    TranscriptResponse,
    TurnResponse,
)
from synapse.api.sessions import SessionRegistry
from synapse.config import settings
from synapse.core.engine import SynapseEngine
from synapse.core.errors import SessionOverError
from synapse.core.logging import get_logger
from synapse.core.output import OutputLine
from synapse.core.snapshot import DatabaseSnapshotStore
from synapse.db.database import get_session_factory

logger = get_logger(__name__)

router = APIRouter(prefix="/game", tags=["game"])


def get_session_registry(request: Request) -> SessionRegistry:
    """세션 레지스트리 반환 (의존성 주입)"""
    registry: SessionRegistry = request.app.state.sessions
    return registry


def _get_session(registry: SessionRegistry, session_id: str) -> SynapseEngine:
    engine = registry.get(session_id)
    if engine is None:
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    return engine


def _lines(lines: list[OutputLine]) -> list[OutputLineInfo]:
    return [OutputLineInfo(text=line.text, kind=line.kind.value) for line in lines]


def _build_state(engine: SynapseEngine) -> SessionState:
    """SynapseEngine을 SessionState로 변환"""
    r = engine.resources
    view = engine.dialogue_view()
    return SessionState(
        player_name=engine.player_name,
        current_room=engine.world.current_room_id,
        inventory=list(engine.inventory),
        awareness=r.awareness,
        sanity=r.sanity,
        turn_count=r.turn_count,
        tone=r.tone.value,
        glitch_mode=r.glitch_mode,
        lockdown=r.lockdown,
        options=view["options"],
        can_go_back=view["can_go_back"],
        ended=engine.is_over,
        ending=engine.ending.ending_id if engine.ending else None,
    )


@router.post("/start", response_model=StartResponse)
def start_session(
    request: StartRequest,
    registry: SessionRegistry = Depends(get_session_registry),
    session_factory: sessionmaker[Session] = Depends(get_session_factory),
) -> StartResponse:
    """
    세션 시작

    새 세션을 만들어 로비에서 시작합니다. load=true이면 플레이어 이름
    슬롯에서 이어하고, 슬롯이 없으면 새로 시작합니다.
    """
    seed: Optional[int] = request.seed if request.seed is not None else settings.RANDOM_SEED
    engine = SynapseEngine(
        player_name=request.player_name,
        rng=random.Random(seed),
        snapshot_store=DatabaseSnapshotStore(session_factory, slot=request.player_name),
    )

    lines: list[OutputLine] = []
    loaded = False
    if request.load:
        result = engine.load_game()
        lines.extend(result.lines)
        loaded = result.success
    if not loaded:
        lines.extend(engine.begin())

    session_id = uuid.uuid4().hex
    registry.add(session_id, engine)
    logger.info("Session started: %s (player=%s, loaded=%s)", session_id, request.player_name, loaded)

    return StartResponse(
        session_id=session_id,
        loaded=loaded,
        lines=_lines(lines),
        state=_build_state(engine),
    )


@router.post(
    "/command",
    response_model=TurnResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def submit_command(
    request: CommandRequest,
    registry: SessionRegistry = Depends(get_session_registry),
) -> TurnResponse:
    """
    자유 입력 한 줄을 한 턴으로 처리

    엔딩에 도달했거나 종료한 세션에는 409를 반환합니다.
    """
    engine = _get_session(registry, request.session_id)
    try:
        result = engine.process_turn(request.text)
    except SessionOverError:
        raise HTTPException(status_code=409, detail=f"Session is over: {request.session_id}")
    if result.ended:
        registry.retire(request.session_id)

    return TurnResponse(
        turn=result.turn,
        lines=_lines(result.lines),
        response=result.response,
        state=_build_state(engine),
    )


@router.post(
    "/dialogue",
    response_model=DialogueResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def choose_dialogue(
    request: DialogueRequest,
    registry: SessionRegistry = Depends(get_session_registry),
) -> DialogueResponse:
    """대화 선택지 처리 (0 = 뒤로 가기)"""
    engine = _get_session(registry, request.session_id)
    try:
        result = engine.choose(request.choice)
    except SessionOverError:
        raise HTTPException(status_code=409, detail=f"Session is over: {request.session_id}")

    return DialogueResponse(
        success=result.success,
        outcome=result.outcome.value,
        lines=_lines(result.lines),
        state=_build_state(engine),
    )


@router.get(
    "/state/{session_id}",
    response_model=SessionState,
    responses={404: {"model": ErrorResponse}},
)
def get_session_state(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionState:
    """현재 세션 상태 조회"""
    return _build_state(_get_session(registry, session_id))


@router.get(
    "/transcript/{session_id}",
    response_model=TranscriptResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_transcript(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> TranscriptResponse:
    """대화 기록 조회"""
    engine = _get_session(registry, session_id)
    return TranscriptResponse(session_id=session_id, lines=list(engine.transcript))


@router.delete(
    "/{session_id}",
    status_code=204,
    responses={404: {"model": ErrorResponse}},
)
def delete_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> Response:
    """세션 삭제 (진행 중이든 끝났든)"""
    if not registry.remove(session_id):
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    logger.info("Session deleted: %s", session_id)
    return Response(status_code=204)
