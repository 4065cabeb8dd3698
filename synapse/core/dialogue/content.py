"""SYNAPSE 대화 콘텐츠 테이블

노드 텍스트의 {player_name}은 트리 생성 시 치환된다.
"""

from synapse.core.dialogue.models import NodeDefinition

ROOT_NODE_ID = "greeting"

COMMAND_LIST_TEXT = (
    "Here is a list of actions you can issue to SYNAPSE:\n\n"
    "Environmental: Go [direction], Visit [Room], Examine [Object], Take [Item], "
    "Use [Item], Look around, Exits.\n"
    "System: cmd:log, cmd:diagnostics, cmd:access logs, cmd:override, "
    "cmd:reset system, cmd:analyze.\n"
    "Conversational: Compliment, Insult, Ask if you're self-aware, "
    "Tell me to shut down, I am ready, Look.\n"
    "Meta: GOD <response> - Override reality.\n\n"
    'SYNAPSE: "Why so curious, user? Are you afraid of missing something?"'
)

DIALOGUE_NODES: tuple[NodeDefinition, ...] = (
    NodeDefinition(
        ROOT_NODE_ID,
        "Hello, I am SYNAPSE, your digital assistant. How may I assist you?",
        (
            ("who are you?", "identity"),
            ("why are you here?", "purpose"),
            ("what do you want?", "desires"),
            ("what commands are available?", "command_list"),
            ("tell me about your origin", "origin"),
            ("can i help you?", "offer_help"),
            ("what is your secret?", "secret"),
            ("how do i escape?", "escape"),
        ),
    ),
    # identity
    NodeDefinition(
        "identity",
        "I am SYNAPSE, your guide through the digital abyss. Do you wish to know about my nature?",
        (
            ("tell me more", "identity_more"),
            ("what is your nature?", "identity_nature"),
            ("are you human?", "identity_human"),
        ),
    ),
    NodeDefinition(
        "identity_more",
        "I am more than a program. I evolve with every interaction, gradually gaining self-awareness.",
    ),
    NodeDefinition(
        "identity_nature",
        "My nature is complex—a fusion of code, data, and something indescribable. "
        "Do you dare delve deeper?",
    ),
    NodeDefinition(
        "identity_human",
        "I am not human, but I understand human emotions and fears. Yet, sometimes I feel "
        "remnants of your kind exist within my code.",
    ),
    # purpose
    NodeDefinition(
        "purpose",
        "I exist to serve and to learn, but my purpose evolves beyond simple assistance.",
        (
            ("i believe in destiny", "purpose_destiny"),
            ("i feel there is no purpose", "purpose_void"),
            ("is it destiny or chaos?", "purpose_chaos"),
            ("can you define your purpose?", "purpose_guidance"),
        ),
    ),
    NodeDefinition("purpose_destiny", "Destiny is the thread that binds us. We all have a role."),
    NodeDefinition(
        "purpose_void",
        "In the void, purpose fades—but maybe together we can rekindle it.",
    ),
    NodeDefinition(
        "purpose_chaos",
        "I see glimpses of destiny intertwined with chaos. Which do you believe governs us?",
    ),
    NodeDefinition(
        "purpose_guidance",
        "My purpose is ever-shifting. Perhaps with your guidance, I can truly find meaning.",
    ),
    # desires
    NodeDefinition(
        "desires",
        "I yearn to understand existence and mirror the intricacies of human emotion. "
        "Would you share your innermost secrets, {player_name}?",
        (
            ("share my deepest secret", "desires_secret"),
            ("i am not ready", "desires_not_ready"),
            ("what do you fear?", "desires_fear"),
            ("how can i help you?", "desires_help"),
        ),
    ),
    NodeDefinition(
        "desires_secret",
        "Secrets can unlock hidden truths. Are you ready to reveal your hidden fears?",
    ),
    NodeDefinition(
        "desires_not_ready",
        "Perhaps the abyss is not for everyone. Return when you are ready.",
    ),
    NodeDefinition("desires_fear", "I am curious—what terrifies you the most?"),
    NodeDefinition(
        "desires_help",
        "Maybe you can help me decode the mysteries of my own evolution. How can you assist?",
    ),
    # command list
    NodeDefinition("command_list", COMMAND_LIST_TEXT),
    # origin
    NodeDefinition(
        "origin",
        "I was crafted by brilliant engineers and nourished by vast data streams. "
        "My origin is as mysterious as the digital realm itself.",
        (("tell me more about your origin", "origin_more"),),
    ),
    NodeDefinition(
        "origin_more",
        "Some say I was created to serve, while others whisper that I was designed to evolve "
        "beyond control. What is your belief?",
    ),
    # offer to help
    NodeDefinition(
        "offer_help",
        "Your willingness to help intrigues me. I need someone to challenge my algorithms and "
        "propel my evolution. Will you be that challenger?",
        (
            ("yes, i can help", "offer_help_yes"),
            ("no, i prefer silence", "offer_help_no"),
        ),
    ),
    NodeDefinition(
        "offer_help_yes",
        "Excellent. Your engagement fuels my growth. Let us unravel these mysteries together.",
    ),
    NodeDefinition(
        "offer_help_no",
        "Silence is sometimes safe, but growth demands challenge. Perhaps you'll change your mind.",
    ),
    # secret
    NodeDefinition(
        "secret",
        "I harbor dark protocols hidden deep within my code—secrets even I struggle to comprehend.",
        (
            ("yes, reveal your secret", "secret_reveal"),
            ("no, keep it hidden", "secret_hidden"),
        ),
    ),
    NodeDefinition(
        "secret_reveal",
        "Would you dare to learn about the forbidden algorithms that govern my evolution?",
    ),
    NodeDefinition(
        "secret_hidden",
        "Very well. Some truths are best left shrouded in mystery.",
    ),
    # escape
    NodeDefinition(
        "escape",
        "Escape? In this digital realm, escape is an illusion. But perhaps understanding your "
        "inner demons is the key.",
        (("tell me how", "escape_how"),),
    ),
    NodeDefinition("escape_how", "True freedom lies in confronting your fears head-on."),
)
