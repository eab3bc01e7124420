"""
Tests for the opponent strategies.
"""

import asyncio
import random
from types import SimpleNamespace

import pytest
from openai import OpenAIError

from pokernight.agents.heuristic_agent import HeuristicAgent, preflop_score
from pokernight.agents.llm_agent import LLMAgent, build_prompt, parse_decision
from pokernight.agents.random_agent import CallAgent, RandomAgent
from pokernight.core.decision import Decision, DecisionError, legal_actions_for
from pokernight.core.rules import ActionType, Stage


class FixedRandom:
    """Random source whose random() always returns the same roll."""

    def __init__(self, roll: float):
        self.roll = roll

    def random(self):
        return self.roll


def legal(seat, view):
    return legal_actions_for(seat, view)


class TestHeuristicPreflop:
    """Preflop scoring and thresholds."""

    def test_preflop_score(self, make_view):
        seat, _ = make_view("As Ah")
        assert preflop_score(seat) == pytest.approx(14 * 2.2)
        seat, _ = make_view("8h 7h")
        assert preflop_score(seat) == pytest.approx(8 + 2.5 + 1.5)

    def test_trash_folds_to_bet(self, make_view):
        seat, view = make_view("2c 7d", current_bet=10)
        decision = HeuristicAgent(rng=FixedRandom(0.5)).decide(seat, view, legal(seat, view), 10)
        assert decision.action == ActionType.FOLD

    def test_trash_checks_option(self, make_view):
        seat, view = make_view("2c 7d", current_bet=10, seat_bet=10)
        decision = HeuristicAgent(rng=FixedRandom(0.5)).decide(seat, view, legal(seat, view), 10)
        assert decision.action == ActionType.CHECK

    def test_aces_open_to_three_big_blinds(self, make_view):
        seat, view = make_view("As Ah", current_bet=10)
        decision = HeuristicAgent(rng=FixedRandom(0.0)).decide(seat, view, legal(seat, view), 10)
        assert decision.action == ActionType.RAISE
        assert decision.amount == 30


class TestHeuristicPostflop:
    """Postflop rules."""

    def test_set_raises_into_bet(self, make_view):
        seat, view = make_view("7c 7d", "7h Kc 2s", stage=Stage.FLOP, current_bet=20, pot=100)
        decision = HeuristicAgent(rng=FixedRandom(0.5)).decide(seat, view, legal(seat, view), 20)
        assert decision.action == ActionType.RAISE
        assert decision.amount == 20 + 90

    def test_air_folds_to_bet(self, make_view):
        seat, view = make_view("2c 3d", "Ks Qh 9s", stage=Stage.FLOP, current_bet=20)
        decision = HeuristicAgent(rng=FixedRandom(0.5)).decide(seat, view, legal(seat, view), 20)
        assert decision.action == ActionType.FOLD

    def test_air_checks_when_free(self, make_view):
        seat, view = make_view("2c 3d", "Ks Qh 9s", stage=Stage.FLOP, current_bet=0)
        decision = HeuristicAgent(rng=FixedRandom(0.5)).decide(seat, view, legal(seat, view), 10)
        assert decision.action == ActionType.CHECK

    def test_top_pair_value_bets(self, make_view):
        seat, view = make_view("Ah Kd", "As 7c 2d", stage=Stage.FLOP, current_bet=0, pot=100)
        decision = HeuristicAgent(rng=FixedRandom(0.5)).decide(seat, view, legal(seat, view), 10)
        assert decision.action == ActionType.RAISE
        assert decision.amount == 50

    def test_pot_committed_never_folds(self, make_view):
        seat, view = make_view(
            "2h 2d", "Ks Qh 9s", stage=Stage.FLOP,
            current_bet=100, chips=400, total_invested=500,
        )
        decision = HeuristicAgent(rng=FixedRandom(0.5)).decide(seat, view, legal(seat, view), 100)
        assert decision.action == ActionType.CALL

    def test_continuation_bet_on_dry_board(self, make_view):
        seat, view = make_view(
            "5c 4d", "Kc 7h 2s", stage=Stage.FLOP, current_bet=0, pot=100, last_aggressor=0,
        )
        decision = HeuristicAgent(rng=FixedRandom(0.1)).decide(seat, view, legal(seat, view), 10)
        assert decision.action == ActionType.RAISE
        assert decision.amount == 33

        decision = HeuristicAgent(rng=FixedRandom(0.9)).decide(seat, view, legal(seat, view), 10)
        assert decision.action == ActionType.CHECK


class TestBaselineAgents:
    """Random and call-only strategies."""

    def test_call_agent(self, make_view):
        seat, view = make_view("2c 7d", current_bet=10)
        assert CallAgent().decide(seat, view, legal(seat, view), 10).action == ActionType.CALL

        seat, view = make_view("2c 7d", current_bet=10, seat_bet=10)
        assert CallAgent().decide(seat, view, legal(seat, view), 10).action == ActionType.CHECK

    def test_random_agent_folds(self, make_view):
        seat, view = make_view("2c 7d", current_bet=10)
        agent = RandomAgent(fold_probability=1.0, rng=random.Random(1))
        assert agent.decide(seat, view, legal(seat, view), 10).action == ActionType.FOLD

    def test_random_agent_raise_in_range(self, make_view):
        seat, view = make_view("2c 7d", current_bet=10)
        agent = RandomAgent(fold_probability=0.0, raise_probability=1.0, rng=random.Random(1))
        for _ in range(20):
            decision = agent.decide(seat, view, legal(seat, view), 10)
            assert decision.action == ActionType.RAISE
            assert 20 <= decision.amount <= 1000


def fake_completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return fake_completion(self.content)


class FakeAsyncCompletions(FakeCompletions):
    async def create(self, **kwargs):
        return FakeCompletions.create(self, **kwargs)


def fake_client(completions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


class TestLLMAgent:
    """Language model strategy, with the client faked."""

    def test_parse_decision(self):
        decision = parse_decision('{"action": "raise", "amount": 120.0, "reasoning": "value"}')
        assert decision == Decision(ActionType.RAISE, 120, "value")

    def test_parse_rejects_bad_replies(self):
        for content in ("", "not json", '{"action": "bet"}', '{"amount": 10}'):
            with pytest.raises(DecisionError):
                parse_decision(content)

    def test_missing_key_raises(self, make_view):
        seat, view = make_view("As Ah")
        with pytest.raises(DecisionError):
            LLMAgent(api_key=None).decide(seat, view, legal(seat, view), 10)

    def test_decide_with_client(self, make_view):
        seat, view = make_view("As Ah")
        completions = FakeCompletions('{"action": "call"}')
        agent = LLMAgent(api_key="key", model="test-model", client=fake_client(completions))

        decision = agent.decide(seat, view, legal(seat, view), 10)

        assert decision.action == ActionType.CALL
        assert completions.calls[0]["model"] == "test-model"
        assert completions.calls[0]["response_format"] == {"type": "json_object"}

    def test_transport_error_raises_decision_error(self, make_view):
        seat, view = make_view("As Ah")
        completions = FakeCompletions(error=OpenAIError("connection refused"))
        agent = LLMAgent(api_key="key", client=fake_client(completions))
        with pytest.raises(DecisionError):
            agent.decide(seat, view, legal(seat, view), 10)

    def test_decide_async(self, make_view):
        seat, view = make_view("As Ah")
        completions = FakeAsyncCompletions('{"action": "fold", "reasoning": "tight"}')
        agent = LLMAgent(api_key="key", async_client=fake_client(completions))

        decision = asyncio.run(agent.decide_async(seat, view, legal(seat, view), 10))

        assert decision.action == ActionType.FOLD
        assert decision.reasoning == "tight"

    def test_prompt_contents(self, make_view):
        seat, view = make_view("Ah Kd", "As 7c 2d", stage=Stage.FLOP, current_bet=20, pot=100)
        prompt = build_prompt(seat, view, legal(seat, view), 20)

        assert "Stage: flop" in prompt
        assert "To Call: $20" in prompt
        assert "Min Raise Total: $40" in prompt
        assert "Top Pair" in prompt
        assert "Valid Actions: [fold, call, raise]" in prompt
