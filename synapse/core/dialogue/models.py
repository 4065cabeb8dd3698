"""대화 트리 도메인 모델"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DialogueDefinitionError(ValueError):
    """대화 콘텐츠 테이블이 트리를 이루지 못할 때"""


class ChoiceOutcome(str, Enum):
    DESCENDED = "descended"
    WENT_BACK = "went_back"
    INVALID = "invalid"


@dataclass(frozen=True)
class NodeDefinition:
    """콘텐츠 테이블의 노드 한 줄

    choices: (선택지 라벨, 자식 노드 ID) 목록. 선언 순서가 곧 선택 번호 순서.
    """

    node_id: str
    message: str
    choices: tuple[tuple[str, str], ...] = ()


@dataclass(eq=False)
class DialogueNode:
    """런타임 대화 노드. 세션 동안 변경하지 않는다."""

    node_id: str
    message: str
    children: dict[str, DialogueNode] = field(default_factory=dict)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def labels(self) -> list[str]:
        return list(self.children)

    def child_at(self, index: int) -> tuple[str, DialogueNode]:
        """1부터 시작하는 선택 번호로 자식 조회"""
        label = self.labels[index - 1]
        return label, self.children[label]
