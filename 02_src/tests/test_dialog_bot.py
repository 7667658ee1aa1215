"""Tests for DialogBot turn dispatch."""

from unittest.mock import AsyncMock, Mock

import pytest

from dialogbot.bot import (
    EMAIL_UNSUPPORTED_REPLY,
    HELP_REPLY,
    LOCK_DEVICE_REPLY,
    NO_ANSWER_REPLY,
    NOT_UNDERSTOOD_REPLY,
    DialogBot,
)
from dialogbot.dialogs import GREETING_TEMPLATE, NAME_PROMPT
from dialogbot.models import QueryResult, UserProfile
from dialogbot.turn import get_replies


async def _name_user(run_turn, make_activity, name="Ana", **ids):
    await run_turn(make_activity("oi", **ids))
    await run_turn(make_activity(name, **ids))


class TestIntentBranch:
    """Tests for confidently recognized intents."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "intent,reply",
        [
            ("None", NOT_UNDERSTOOD_REPLY),
            ("Utilities_Help", HELP_REPLY),
            ("HomeAutomation_TurnOff", LOCK_DEVICE_REPLY),
            ("Communication_SendEmail", EMAIL_UNSUPPORTED_REPLY),
        ],
    )
    async def test_known_intent_reply(
        self, run_turn, make_activity, mock_recognizer, intent, reply
    ):
        mock_recognizer.intents = {intent: 0.9}

        assert await run_turn(make_activity("anything")) == [reply]

    @pytest.mark.asyncio
    async def test_unknown_intent_reports_name_and_score(
        self, run_turn, make_activity, mock_recognizer
    ):
        mock_recognizer.intents = {"Weather_GetForecast": 0.9}

        responses = await run_turn(make_activity("vai chover?"))

        assert len(responses) == 1
        assert "Weather_GetForecast" in responses[0]
        assert "0.9" in responses[0]

    @pytest.mark.asyncio
    async def test_turn_off_locks_device(
        self, run_turn, make_activity, mock_recognizer, mock_locker
    ):
        mock_recognizer.intents = {"HomeAutomation_TurnOff": 0.95}

        await run_turn(make_activity("desliga"))

        mock_locker.lock.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_other_intents_do_not_lock(
        self, run_turn, make_activity, mock_recognizer, mock_locker
    ):
        mock_recognizer.intents = {"Utilities_Help": 0.95}

        await run_turn(make_activity("ajuda"))

        mock_locker.lock.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_intent_branch_does_not_touch_state(
        self, run_turn, make_activity, mock_recognizer, storage, read_state
    ):
        mock_recognizer.intents = {"Utilities_Help": 0.9}

        await run_turn(make_activity("ajuda"))

        counter, profile = await read_state(make_activity())
        assert counter is None
        assert profile is None
        assert await storage.read(["api/conversations/conv1", "api/users/user1"]) == {}

    @pytest.mark.asyncio
    async def test_intent_is_tracked(
        self, run_turn, make_activity, mock_recognizer, storage
    ):
        mock_recognizer.intents = {"Utilities_Help": 0.9}

        await run_turn(make_activity("ajuda"))

        events = await storage.get_trace_events(event_types=["intent_recognized"])
        assert events[0].data["intent"] == "Utilities_Help"

    @pytest.mark.asyncio
    async def test_reply_and_lock_survive_tracking_failure(
        self, accessors, mock_recognizer, mock_qna, mock_locker, make_activity, make_context
    ):
        mock_recognizer.intents = {"HomeAutomation_TurnOff": 0.95}
        tracker = Mock()
        tracker.track = AsyncMock(side_effect=RuntimeError("Storage not initialized"))
        bot = DialogBot(
            accessors=accessors,
            recognizer=mock_recognizer,
            qna=mock_qna,
            device_locker=mock_locker,
            tracker=tracker,
        )
        context = make_context(make_activity("desliga"))

        await bot.on_turn(context)

        assert [r.text for r in get_replies(context)] == [LOCK_DEVICE_REPLY]
        mock_locker.lock.assert_awaited_once()


class TestConfidenceThreshold:
    """Tests for the 0.84 boundary."""

    @pytest.mark.asyncio
    async def test_exactly_threshold_falls_back(
        self, run_turn, make_activity, mock_recognizer
    ):
        mock_recognizer.intents = {"Utilities_Help": 0.84}

        assert await run_turn(make_activity("ajuda")) == [NAME_PROMPT]

    @pytest.mark.asyncio
    async def test_just_above_threshold_is_confident(
        self, run_turn, make_activity, mock_recognizer
    ):
        mock_recognizer.intents = {"Utilities_Help": 0.8401}

        assert await run_turn(make_activity("ajuda")) == [HELP_REPLY]

    @pytest.mark.asyncio
    async def test_empty_intent_name_falls_back(
        self, run_turn, make_activity, mock_recognizer
    ):
        mock_recognizer.intents = {"": 0.99}

        assert await run_turn(make_activity("???")) == [NAME_PROMPT]

    @pytest.mark.asyncio
    async def test_missing_score_falls_back(
        self, run_turn, make_activity, mock_recognizer
    ):
        mock_recognizer.intents = {"Utilities_Help": None}

        assert await run_turn(make_activity("ajuda")) == [NAME_PROMPT]

    @pytest.mark.asyncio
    async def test_no_recognizer_result_falls_back(
        self, bot_factory, make_activity, make_context, mock_recognizer
    ):
        mock_recognizer.recognize.side_effect = None
        mock_recognizer.recognize.return_value = None
        context = make_context(make_activity("oi"))

        await bot_factory().on_turn(context)

        assert [r.text for r in get_replies(context)] == [NAME_PROMPT]

    @pytest.mark.asyncio
    async def test_custom_threshold(
        self, accessors, mock_recognizer, mock_qna, make_activity, make_context
    ):
        mock_recognizer.intents = {"Utilities_Help": 0.7}
        bot = DialogBot(
            accessors=accessors,
            recognizer=mock_recognizer,
            qna=mock_qna,
            intent_score_threshold=0.5,
        )
        context = make_context(make_activity("ajuda"))

        await bot.on_turn(context)

        assert [r.text for r in get_replies(context)] == [HELP_REPLY]


class TestNameDialogFlow:
    """Tests for collecting the user's name."""

    @pytest.mark.asyncio
    async def test_name_dialog_round_trip(self, run_turn, make_activity, read_state):
        assert await run_turn(make_activity("oi")) == [NAME_PROMPT]
        assert await run_turn(make_activity("Ana")) == [
            GREETING_TEMPLATE.format(name="Ana")
        ]

        _, profile = await read_state(make_activity())
        assert profile == UserProfile(name="Ana")

    @pytest.mark.asyncio
    async def test_confident_intent_does_not_consume_pending_answer(
        self, run_turn, make_activity, mock_recognizer
    ):
        await run_turn(make_activity("oi"))

        mock_recognizer.intents = {"Utilities_Help": 0.9}
        assert await run_turn(make_activity("ajuda")) == [HELP_REPLY]

        mock_recognizer.intents = {}
        assert await run_turn(make_activity("Ana")) == [
            GREETING_TEMPLATE.format(name="Ana")
        ]

    @pytest.mark.asyncio
    async def test_name_is_kept_across_conversations(
        self, run_turn, make_activity, mock_qna
    ):
        await _name_user(run_turn, make_activity)

        responses = await run_turn(make_activity("olá", conversation_id="conv2"))

        assert responses == [NO_ANSWER_REPLY]
        mock_qna.get_answers.assert_awaited_once()


class TestQnABranch:
    """Tests for the QnA fallback once the name is known."""

    @pytest.mark.asyncio
    async def test_confident_answer(self, run_turn, make_activity, mock_qna, storage):
        await _name_user(run_turn, make_activity)
        mock_qna.get_answers.return_value = [QueryResult(answer="Paris", score=0.85)]

        assert await run_turn(make_activity("capital de França?")) == ["Paris"]
        events = await storage.get_trace_events(
            event_types=["qna_answered"], conversation_id="conv1"
        )
        assert events[0].data["score"] == 0.85

    @pytest.mark.asyncio
    async def test_low_score_answer(self, run_turn, make_activity, mock_qna):
        await _name_user(run_turn, make_activity)
        mock_qna.get_answers.return_value = [QueryResult(answer="X", score=0.5)]

        assert await run_turn(make_activity("?")) == [NO_ANSWER_REPLY]

    @pytest.mark.asyncio
    async def test_answer_at_threshold_is_not_enough(
        self, run_turn, make_activity, mock_qna
    ):
        await _name_user(run_turn, make_activity)
        mock_qna.get_answers.return_value = [QueryResult(answer="X", score=0.8)]

        assert await run_turn(make_activity("?")) == [NO_ANSWER_REPLY]

    @pytest.mark.asyncio
    async def test_no_answers(self, run_turn, make_activity, mock_qna):
        await _name_user(run_turn, make_activity)
        mock_qna.get_answers.return_value = []

        assert await run_turn(make_activity("?")) == [NO_ANSWER_REPLY]

    @pytest.mark.asyncio
    async def test_qna_not_called_before_name_known(
        self, run_turn, make_activity, mock_qna
    ):
        await run_turn(make_activity("oi"))

        mock_qna.get_answers.assert_not_awaited()


class TestTurnCounter:
    """Tests for CounterState.turn_count."""

    @pytest.mark.asyncio
    async def test_increments_on_fallback_turns(
        self, run_turn, make_activity, read_state
    ):
        await run_turn(make_activity("oi"))
        await run_turn(make_activity("Ana"))
        await run_turn(make_activity("pergunta"))

        counter, _ = await read_state(make_activity())
        assert counter.turn_count == 3

    @pytest.mark.asyncio
    async def test_not_incremented_by_intent_turns(
        self, run_turn, make_activity, mock_recognizer, read_state
    ):
        await run_turn(make_activity("oi"))

        mock_recognizer.intents = {"Utilities_Help": 0.9}
        await run_turn(make_activity("ajuda"))
        await run_turn(make_activity("ajuda"))

        counter, _ = await read_state(make_activity())
        assert counter.turn_count == 1

    @pytest.mark.asyncio
    async def test_counter_is_per_conversation(
        self, run_turn, make_activity, read_state
    ):
        await run_turn(make_activity("oi", conversation_id="conv1"))
        await run_turn(make_activity("oi", conversation_id="conv2", from_id="user2"))

        counter, _ = await read_state(make_activity(conversation_id="conv1"))
        assert counter.turn_count == 1


class TestNonMessageActivities:
    """Tests for activities other than messages."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("activity_type", ["conversationUpdate", "typing", "event"])
    async def test_ignored(
        self, run_turn, make_activity, mock_recognizer, storage, activity_type
    ):
        responses = await run_turn(make_activity(None, type=activity_type))

        assert responses == []
        mock_recognizer.recognize.assert_not_awaited()
        assert await storage.read(["api/conversations/conv1", "api/users/user1"]) == {}


class TestFailures:
    """Tests for external failures during a turn."""

    @pytest.mark.asyncio
    async def test_recognizer_failure_propagates(
        self, run_turn, make_activity, mock_recognizer
    ):
        mock_recognizer.recognize.side_effect = ConnectionError("LUIS down")

        with pytest.raises(ConnectionError):
            await run_turn(make_activity("oi"))

    @pytest.mark.asyncio
    async def test_qna_failure_leaves_state_unsaved(
        self, run_turn, make_activity, mock_qna, read_state
    ):
        await _name_user(run_turn, make_activity)
        mock_qna.get_answers.side_effect = ConnectionError("QnA down")

        with pytest.raises(ConnectionError):
            await run_turn(make_activity("pergunta"))

        counter, _ = await read_state(make_activity())
        assert counter.turn_count == 2


class TestConstruction:
    """Tests for DialogBot constructor checks."""

    def test_requires_collaborators(self, accessors, mock_recognizer, mock_qna):
        with pytest.raises(ValueError):
            DialogBot(accessors=None, recognizer=mock_recognizer, qna=mock_qna)
        with pytest.raises(ValueError):
            DialogBot(accessors=accessors, recognizer=None, qna=mock_qna)
        with pytest.raises(ValueError):
            DialogBot(accessors=accessors, recognizer=mock_recognizer, qna=None)
