"""
Language Model Agent Implementation.

Asks a chat-completion model for a decision through the ``openai`` client.
Any OpenAI-compatible endpoint works; the default is Google's Gemini
compatibility endpoint.

The model is given the table as seen by the deciding seat plus the
analyzer's read of the hand, and must answer with a JSON object:

    {"action": "check" | "call" | "raise" | "fold", "amount": 120, "reasoning": "..."}

Every failure (no key, transport error, malformed reply) is raised as
DecisionError; the dispatcher turns that into a heuristic fallback.
"""

import logging
from typing import List, Literal, Optional

from openai import AsyncOpenAI, OpenAI, OpenAIError
from pydantic import BaseModel, ValidationError

from pokernight.agents.base import BaseAgent
from pokernight.config import DEFAULT_LLM_BASE_URL, DEFAULT_LLM_MODEL
from pokernight.core.analysis import analyze_hand, get_board_texture
from pokernight.core.decision import Decision, DecisionError, SeatView, TableView
from pokernight.core.rules import ActionType


logger = logging.getLogger(__name__)


SYSTEM_PROMPT = "You are a professional GTO poker bot. Reply with a single JSON object."


class LLMDecisionPayload(BaseModel):
    """Shape of the model's JSON reply."""
    action: Literal["check", "call", "raise", "fold"]
    amount: Optional[float] = None
    reasoning: Optional[str] = None


class LLMAgent(BaseAgent):
    """
    Opponent backed by a remote language model.

    Attributes:
        model: Model name sent with every request
        base_url: OpenAI-compatible endpoint
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_LLM_BASE_URL,
        model: str = DEFAULT_LLM_MODEL,
        name: Optional[str] = None,
        client: Optional[OpenAI] = None,
        async_client: Optional[AsyncOpenAI] = None,
    ):
        super().__init__(name)
        self.api_key = api_key
        self.base_url = base_url
        self.model = model
        self._client = client
        self._async_client = async_client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._require_key()
            self._client = OpenAI(api_key=self.api_key, base_url=self.base_url)
        return self._client

    @property
    def async_client(self) -> AsyncOpenAI:
        if self._async_client is None:
            self._require_key()
            self._async_client = AsyncOpenAI(api_key=self.api_key, base_url=self.base_url)
        return self._async_client

    def _require_key(self) -> None:
        if not self.api_key:
            raise DecisionError("No API key configured for the language model")

    def decide(
        self,
        seat: SeatView,
        view: TableView,
        legal_actions: List[ActionType],
        min_raise: int,
    ) -> Decision:
        messages = self._messages(seat, view, legal_actions, min_raise)
        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                response_format={"type": "json_object"},
            )
        except OpenAIError as e:
            raise DecisionError(f"Language model request failed: {e}") from e
        return parse_decision(completion.choices[0].message.content)

    async def decide_async(
        self,
        seat: SeatView,
        view: TableView,
        legal_actions: List[ActionType],
        min_raise: int,
    ) -> Decision:
        messages = self._messages(seat, view, legal_actions, min_raise)
        try:
            completion = await self.async_client.chat.completions.create(
                model=self.model,
                messages=messages,
                response_format={"type": "json_object"},
            )
        except OpenAIError as e:
            raise DecisionError(f"Language model request failed: {e}") from e
        return parse_decision(completion.choices[0].message.content)

    def _messages(
        self,
        seat: SeatView,
        view: TableView,
        legal_actions: List[ActionType],
        min_raise: int,
    ) -> list:
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_prompt(seat, view, legal_actions, min_raise)},
        ]


def build_prompt(
    seat: SeatView,
    view: TableView,
    legal_actions: List[ActionType],
    min_raise: int,
) -> str:
    """Describe the decision to the model."""
    analysis = analyze_hand(seat.hole_cards, view.community_cards, view.stage.value)
    texture = get_board_texture(view.community_cards)
    to_call = view.to_call(seat)
    min_legal = view.current_bet + min_raise
    is_aggressor = view.last_aggressor_index == seat.id
    board = ", ".join(str(c) for c in view.community_cards) or "None"

    return f"""
Game State:
- Big blind: ${view.big_blind}
- Stage: {view.stage.value}
- Pot: ${view.pot}
- Board: {board} ({texture.value})
- To Call: ${to_call}
- Min Raise Total: ${min_legal}
- Aggressor: {"YOU (Initiative)" if is_aggressor else "Opponent"}

Your Hand:
- Cards: {", ".join(str(c) for c in seat.hole_cards)}
- Strength: {analysis.rank_name} ({analysis.description})
- Draws: {", ".join(analysis.draws) or "None"} (Outs: {analysis.outs})
- Stack: ${seat.chips}

Strategy:
- If "To Call" > 0 you cannot check. You must call or fold.
- Do not min-raise. If you raise, raise to at least ${min_legal + min_raise} or 60% of the pot.
- "amount" is the total bet for this street, not the increment.

Valid Actions: [{", ".join(a.value for a in legal_actions)}]

Respond in JSON: {{"action": "check"|"call"|"raise"|"fold", "amount": number, "reasoning": string}}
""".strip()


def parse_decision(content: Optional[str]) -> Decision:
    """
    Turn the model's reply into a Decision.

    Raises:
        DecisionError: If the reply is empty or not a valid decision object
    """
    if not content:
        raise DecisionError("Language model returned an empty reply")
    try:
        payload = LLMDecisionPayload.model_validate_json(content)
    except ValidationError as e:
        raise DecisionError(f"Malformed decision from language model: {e}") from e

    amount = int(payload.amount) if payload.amount is not None else None
    logger.debug(f"Model decided {payload.action} {amount if amount is not None else ''}")
    return Decision(ActionType(payload.action), amount, payload.reasoning)
