"""Named state accessors used by the bot."""

from botbuilder.core import ConversationState, StatePropertyAccessor, UserState

COUNTER_STATE_NAME = "CounterState"
DIALOG_STATE_NAME = "DialogState"
USER_PROFILE_NAME = "UserProfile"


class BotAccessors:
    """Conversation and user state plus the three records the bot reads and writes.

    CounterState and DialogState live in conversation state, UserProfile in
    user state.
    """

    def __init__(self, conversation_state: ConversationState, user_state: UserState):
        if conversation_state is None:
            raise ValueError(
                "ConversationState must be defined before creating conversation-scoped accessors."
            )
        if user_state is None:
            raise ValueError(
                "UserState must be defined before creating user-scoped accessors."
            )

        self.conversation_state = conversation_state
        self.user_state = user_state

        self.counter_state: StatePropertyAccessor = conversation_state.create_property(
            COUNTER_STATE_NAME
        )
        self.dialog_state: StatePropertyAccessor = conversation_state.create_property(
            DIALOG_STATE_NAME
        )
        self.user_profile: StatePropertyAccessor = user_state.create_property(
            USER_PROFILE_NAME
        )
