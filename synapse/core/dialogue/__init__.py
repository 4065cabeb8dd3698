"""대화 트리 패키지

공개 API:
- 모델: NodeDefinition, DialogueNode, ChoiceOutcome, DialogueDefinitionError
- 콘텐츠: DIALOGUE_NODES, ROOT_NODE_ID
- 트리: DialogueTree, instantiate_tree, compose_message
"""

from synapse.core.dialogue.content import DIALOGUE_NODES, ROOT_NODE_ID
from synapse.core.dialogue.models import (
    ChoiceOutcome,
    DialogueDefinitionError,
    DialogueNode,
    NodeDefinition,
)
from synapse.core.dialogue.tree import (
    NO_WORDS_TEXT,
    TONE_SUFFIXES,
    UNRAVELING_SUFFIX,
    DialogueTree,
    compose_message,
    instantiate_tree,
)

__all__ = [
    "DIALOGUE_NODES",
    "ROOT_NODE_ID",
    "ChoiceOutcome",
    "DialogueDefinitionError",
    "DialogueNode",
    "NodeDefinition",
    "NO_WORDS_TEXT",
    "TONE_SUFFIXES",
    "UNRAVELING_SUFFIX",
    "DialogueTree",
    "compose_message",
    "instantiate_tree",
]
