"""대화 트리 테스트"""

import pytest

from synapse.core.dialogue import (
    DIALOGUE_NODES,
    NO_WORDS_TEXT,
    ROOT_NODE_ID,
    UNRAVELING_SUFFIX,
    ChoiceOutcome,
    DialogueDefinitionError,
    DialogueTree,
    NodeDefinition,
    compose_message,
    instantiate_tree,
)
from synapse.core.resources import Tone

ROOT_TEXT = "Hello, I am SYNAPSE, your digital assistant. How may I assist you?"


@pytest.fixture()
def tree() -> DialogueTree:
    t = DialogueTree()
    t.build("Ava")
    return t


class TestInstantiate:
    def test_root_has_eight_branches(self):
        root = instantiate_tree(DIALOGUE_NODES, ROOT_NODE_ID)
        assert root.labels == [
            "who are you?",
            "why are you here?",
            "what do you want?",
            "what commands are available?",
            "tell me about your origin",
            "can i help you?",
            "what is your secret?",
            "how do i escape?",
        ]

    def test_player_name_substituted(self):
        root = instantiate_tree(DIALOGUE_NODES, ROOT_NODE_ID, player_name="Ava")
        _, desires = root.child_at(3)
        assert "Would you share your innermost secrets, Ava?" in desires.message
        assert "{player_name}" not in desires.message

    @pytest.mark.parametrize(
        "node_id, message",
        [
            ("identity_nature", "My nature is complex—a fusion of code, data, and something indescribable."),
            ("purpose_void", "In the void, purpose fades—but maybe together we can rekindle it."),
            ("desires_fear", "I am curious—what terrifies you the most?"),
            ("secret", "I harbor dark protocols hidden deep within my code—secrets even I"),
        ],
    )
    def test_node_wording(self, node_id, message):
        messages = {node.node_id: node.message for node in DIALOGUE_NODES}
        assert messages[node_id].startswith(message)

    def test_duplicate_id_rejected(self):
        with pytest.raises(DialogueDefinitionError):
            instantiate_tree([NodeDefinition("a", "x"), NodeDefinition("a", "y")], "a")

    def test_unknown_child_rejected(self):
        with pytest.raises(DialogueDefinitionError):
            instantiate_tree([NodeDefinition("a", "x", (("go", "b"),))], "a")

    def test_two_parents_rejected(self):
        definitions = [
            NodeDefinition("a", "x", (("1", "b"), ("2", "c"))),
            NodeDefinition("b", "y", (("1", "c"),)),
            NodeDefinition("c", "z"),
        ]
        with pytest.raises(DialogueDefinitionError):
            instantiate_tree(definitions, "a")

    def test_detached_cycle_rejected(self):
        """루트와 끊긴 고리는 부모가 하나씩이어도 거부"""
        definitions = [
            NodeDefinition("a", "x"),
            NodeDefinition("b", "y", (("1", "c"),)),
            NodeDefinition("c", "z", (("1", "b"),)),
        ]
        with pytest.raises(DialogueDefinitionError):
            instantiate_tree(definitions, "a")

    def test_edge_back_to_root_rejected(self):
        definitions = [NodeDefinition("a", "x", (("1", "b"),)), NodeDefinition("b", "y", (("1", "a"),))]
        with pytest.raises(DialogueDefinitionError):
            instantiate_tree(definitions, "a")


class TestChoose:
    def test_back_with_empty_stack_is_invalid(self, tree: DialogueTree):
        before = tree.current
        assert tree.choose(0) == (ChoiceOutcome.INVALID, None)
        assert tree.current is before
        assert tree.back_stack == []

    def test_descend_pushes_current(self, tree: DialogueTree):
        root = tree.current
        outcome, label = tree.choose(1)
        assert outcome == ChoiceOutcome.DESCENDED
        assert label == "who are you?"
        assert tree.current.node_id == "identity"
        assert tree.back_stack == [root]

    def test_back_pops(self, tree: DialogueTree):
        tree.choose(2)
        tree.choose(3)
        assert tree.current.node_id == "purpose_chaos"
        assert tree.choose(0)[0] == ChoiceOutcome.WENT_BACK
        assert tree.current.node_id == "purpose"
        assert tree.choose(0)[0] == ChoiceOutcome.WENT_BACK
        assert tree.current.node_id == ROOT_NODE_ID
        assert not tree.can_go_back

    @pytest.mark.parametrize("index", [-1, 9, 100])
    def test_out_of_range_is_invalid(self, tree: DialogueTree, index):
        assert tree.choose(index) == (ChoiceOutcome.INVALID, None)
        assert tree.current.node_id == ROOT_NODE_ID

    def test_leaf_offers_no_options(self, tree: DialogueTree):
        tree.choose(8)
        tree.choose(1)
        assert tree.current.is_leaf
        assert tree.options() == []
        assert tree.choose(1)[0] == ChoiceOutcome.INVALID
        assert tree.can_go_back

    def test_choose_without_tree(self):
        assert DialogueTree().choose(1) == (ChoiceOutcome.INVALID, None)


class TestLifecycle:
    def test_build_is_idempotent(self, tree: DialogueTree):
        tree.choose(1)
        current = tree.current
        tree.build("Ava")
        assert tree.current is current

    def test_teardown_then_build(self, tree: DialogueTree):
        tree.choose(1)
        tree.teardown()
        assert not tree.is_built
        assert tree.back_stack == []
        tree.build("Ava")
        assert tree.current.node_id == ROOT_NODE_ID

    def test_rebuild_returns_to_root(self, tree: DialogueTree):
        tree.choose(4)
        tree.rebuild("Ava")
        assert tree.current.node_id == ROOT_NODE_ID
        assert tree.back_stack == []


class TestRender:
    def test_tone_suffixes(self, tree: DialogueTree):
        assert tree.render(Tone.CALM, 100) == ROOT_TEXT + " I'm here to guide you."
        assert tree.render(Tone.AMBIGUOUS, 100) == ROOT_TEXT + " Do you feel its pull?"
        assert tree.render(Tone.HOSTILE, 100) == ROOT_TEXT + " Darkness surrounds us."

    def test_low_sanity_suffix(self):
        assert compose_message("Hi.", Tone.CALM, 29) == "Hi. I'm here to guide you." + UNRAVELING_SUFFIX
        assert compose_message("Hi.", Tone.CALM, 30) == "Hi. I'm here to guide you."

    def test_node_text_not_modified(self, tree: DialogueTree):
        tree.render(Tone.HOSTILE, 10)
        assert tree.current.message == ROOT_TEXT

    def test_missing_tree_renders_generic_text(self, caplog):
        with caplog.at_level("ERROR"):
            assert DialogueTree().render(Tone.CALM, 100) == NO_WORDS_TEXT
        assert "Dialogue tree missing" in caplog.text
