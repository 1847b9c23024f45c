"""SessionState and ConversationMessage -- ordering, history, serialization."""

from datetime import datetime, timedelta

from agents.registry import AgentKey
from agents.schemas import ConversationMessage, Role
from agents.session import WELCOME_MESSAGE, SessionState

from conftest import SteppingClock


class TestSessionState:

    def test_starts_with_welcome_from_main(self, clock):
        state = SessionState(clock=clock)

        (welcome,) = state.messages
        assert welcome.role is Role.SYSTEM
        assert welcome.agent is AgentKey.MAIN
        assert welcome.content == WELCOME_MESSAGE
        assert state.current_agent is AgentKey.MAIN
        assert state.busy is False

    def test_welcome_can_be_disabled(self, clock):
        assert len(SessionState(clock=clock, welcome=None)) == 0

    def test_append_assigns_unique_ids_in_order(self, clock):
        state = SessionState(clock=clock, welcome=None)
        first = state.append(Role.USER, "a")
        second = state.append(Role.AGENT, "b", agent=AgentKey.SALES_AND_REVENUE)

        assert state.messages == (first, second)
        assert first.id != second.id
        assert first.timestamp < second.timestamp

    def test_clock_going_backwards_is_clamped(self):
        backwards = SteppingClock(step=timedelta(seconds=-5))
        state = SessionState(clock=backwards, welcome=None)

        stamps = [state.append(Role.USER, str(i)).timestamp for i in range(3)]

        assert stamps == sorted(stamps)
        assert len(set(stamps)) == 1

    def test_history_returns_last_k_as_role_lines(self, clock):
        state = SessionState(clock=clock, welcome=None)
        for i in range(7):
            state.append(Role.USER if i % 2 == 0 else Role.AGENT, f"m{i}")

        assert state.history(5) == ["user: m2", "agent: m3", "user: m4", "agent: m5", "user: m6"]
        assert state.history(0) == []
        assert len(state.history(50)) == 7

    def test_messages_view_is_read_only(self, clock):
        state = SessionState(clock=clock)
        view = state.messages
        state.append(Role.USER, "baru")

        assert isinstance(view, tuple)
        assert len(view) == 1


class TestConversationMessage:

    def test_dict_round_trip(self):
        message = ConversationMessage(
            id="abc",
            role=Role.AGENT,
            content="Neraca terlampir.",
            agent=AgentKey.FINANCIAL_REPORTING,
            timestamp=datetime(2024, 11, 4, 9, 30),
        )

        data = message.to_dict()

        assert data["role"] == "agent"
        assert data["agent"] == "FINANCIAL_REPORTING"
        assert ConversationMessage.from_dict(data) == message

    def test_user_message_has_no_agent(self):
        data = ConversationMessage(
            id="u1", role=Role.USER, content="halo", timestamp=datetime(2024, 1, 1)
        ).to_dict()

        assert data["agent"] is None
        assert ConversationMessage.from_dict(data).agent is None
