"""대화 트리: 생성, 탐색, 렌더링

트리는 콘텐츠 테이블(DIALOGUE_NODES)에서 한 번에 만들어진다.
뒤로 가기는 부모 포인터가 아니라 명시적 스택(back_stack)으로 처리한다.
"""

from __future__ import annotations

from typing import Optional, Sequence

from synapse.core.dialogue.content import DIALOGUE_NODES, ROOT_NODE_ID
from synapse.core.dialogue.models import (
    ChoiceOutcome,
    DialogueDefinitionError,
    DialogueNode,
    NodeDefinition,
)
from synapse.core.logging import get_logger
from synapse.core.resources import LOW_SANITY_THRESHOLD, Tone

logger = get_logger(__name__)

TONE_SUFFIXES: dict[Tone, str] = {
    Tone.CALM: " I'm here to guide you.",
    Tone.AMBIGUOUS: " Do you feel its pull?",
    Tone.HOSTILE: " Darkness surrounds us.",
}
UNRAVELING_SUFFIX = " ...or is it your mind unraveling?"
NO_WORDS_TEXT = "I have no words for you."


def instantiate_tree(
    definitions: Sequence[NodeDefinition],
    root_id: str,
    player_name: str = "",
) -> DialogueNode:
    """노드 정의 테이블 → 루트 DialogueNode

    Raises:
        DialogueDefinitionError: 중복 ID, 없는 자식, 부모가 둘 이상인 노드,
            루트에서 닿지 않는 노드가 있을 때
    """
    by_id: dict[str, NodeDefinition] = {}
    for definition in definitions:
        if definition.node_id in by_id:
            raise DialogueDefinitionError(f"Duplicate node id: {definition.node_id}")
        by_id[definition.node_id] = definition

    if root_id not in by_id:
        raise DialogueDefinitionError(f"Unknown root node: {root_id}")

    parent_of: dict[str, str] = {}
    for definition in definitions:
        for _, child_id in definition.choices:
            if child_id not in by_id:
                raise DialogueDefinitionError(
                    f"Node {definition.node_id} points to unknown node {child_id}"
                )
            if child_id == root_id or child_id in parent_of:
                raise DialogueDefinitionError(f"Node {child_id} has more than one parent")
            parent_of[child_id] = definition.node_id

    nodes = {
        node_id: DialogueNode(
            node_id=node_id,
            message=definition.message.replace("{player_name}", player_name),
        )
        for node_id, definition in by_id.items()
    }
    for definition in definitions:
        node = nodes[definition.node_id]
        for label, child_id in definition.choices:
            node.children[label] = nodes[child_id]

    # 부모가 하나뿐이어도 루트와 끊긴 고리(cycle)는 남을 수 있다
    unreachable = set(by_id) - _reachable(nodes[root_id])
    if unreachable:
        raise DialogueDefinitionError(f"Unreachable nodes: {sorted(unreachable)}")

    return nodes[root_id]


def _reachable(root: DialogueNode) -> set[str]:
    seen: set[str] = set()
    pending = [root]
    while pending:
        node = pending.pop()
        if node.node_id in seen:
            continue
        seen.add(node.node_id)
        pending.extend(node.children.values())
    return seen


def compose_message(message: str, tone: Tone, sanity: int) -> str:
    """노드 텍스트 + 톤 접미사 + (정신력 낮으면) 붕괴 접미사"""
    text = message + TONE_SUFFIXES[tone]
    if sanity < LOW_SANITY_THRESHOLD:
        text += UNRAVELING_SUFFIX
    return text


class DialogueTree:
    """
    대화 커서 + 뒤로 가기 스택

    build()는 current가 이미 있으면 아무것도 하지 않는다.
    teardown() 후에는 다시 build()로 루트부터 시작한다.
    """

    def __init__(
        self,
        definitions: Sequence[NodeDefinition] = DIALOGUE_NODES,
        root_id: str = ROOT_NODE_ID,
    ) -> None:
        self._definitions = definitions
        self._root_id = root_id
        self.root: Optional[DialogueNode] = None
        self.current: Optional[DialogueNode] = None
        self.back_stack: list[DialogueNode] = []

    @property
    def is_built(self) -> bool:
        return self.current is not None

    @property
    def can_go_back(self) -> bool:
        return bool(self.back_stack)

    def build(self, player_name: str = "") -> None:
        if self.current is not None:
            return
        self.root = instantiate_tree(self._definitions, self._root_id, player_name)
        self.current = self.root
        self.back_stack.clear()
        logger.debug("Dialogue tree built (root=%s)", self._root_id)

    def teardown(self) -> None:
        self.root = None
        self.current = None
        self.back_stack.clear()

    def rebuild(self, player_name: str = "") -> None:
        self.teardown()
        self.build(player_name)

    def options(self) -> list[str]:
        """현재 노드의 선택지 라벨 (선언 순서)"""
        if self.current is None:
            return []
        return self.current.labels

    def choose(self, index: int) -> tuple[ChoiceOutcome, Optional[str]]:
        """선택 번호 처리.

        0: 뒤로 가기 (스택이 비어 있으면 INVALID)
        1..N: N번째 자식으로 내려감

        Returns:
            (결과, 선택한 라벨 또는 None)
        """
        if self.current is None:
            logger.error("Dialogue choice requested but no dialogue tree is active")
            return ChoiceOutcome.INVALID, None

        if index == 0:
            if not self.back_stack:
                return ChoiceOutcome.INVALID, None
            self.current = self.back_stack.pop()
            return ChoiceOutcome.WENT_BACK, None

        if 1 <= index <= len(self.current.children):
            label, child = self.current.child_at(index)
            self.back_stack.append(self.current)
            self.current = child
            return ChoiceOutcome.DESCENDED, label

        return ChoiceOutcome.INVALID, None

    def render(self, tone: Tone, sanity: int) -> str:
        """현재 노드의 표시 텍스트. 트리가 없으면 로그 후 일반 문구."""
        if self.current is None:
            logger.error("Dialogue tree missing at render time")
            return NO_WORDS_TEXT
        return compose_message(self.current.message, tone, sanity)
