"""HTTP 세션 레지스트리

진행 중 세션은 제한 없이 보관한다. 엔딩/종료로 끝난 세션은 기록 조회용으로
최근 retain_ended개만 남기고 오래된 것부터 버린다.
"""

from collections import OrderedDict
from typing import Optional

from synapse.config import settings
from synapse.core.engine import SynapseEngine
from synapse.core.logging import get_logger

logger = get_logger(__name__)


class SessionRegistry:
    def __init__(self, retain_ended: int = settings.ENDED_SESSION_RETENTION):
        self.retain_ended = retain_ended
        self.active: dict[str, SynapseEngine] = {}
        self.ended: OrderedDict[str, SynapseEngine] = OrderedDict()

    def __len__(self) -> int:
        return len(self.active) + len(self.ended)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self.active or session_id in self.ended

    def add(self, session_id: str, engine: SynapseEngine) -> None:
        self.active[session_id] = engine

    def get(self, session_id: str) -> Optional[SynapseEngine]:
        engine = self.active.get(session_id)
        if engine is None:
            engine = self.ended.get(session_id)
        return engine

    def retire(self, session_id: str) -> None:
        """끝난 세션을 보관 영역으로 옮긴다"""
        engine = self.active.pop(session_id, None)
        if engine is None:
            return
        self.ended[session_id] = engine
        while len(self.ended) > self.retain_ended:
            evicted, _ = self.ended.popitem(last=False)
            logger.info("Ended session evicted: %s", evicted)

    def remove(self, session_id: str) -> bool:
        if self.active.pop(session_id, None) is not None:
            return True
        return self.ended.pop(session_id, None) is not None

    def clear(self) -> None:
        self.active.clear()
        self.ended.clear()
