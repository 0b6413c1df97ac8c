"""
Wire codec for the Hearts server.

Converts the server's JSON documents into snapshot values and encodes the
engine's decisions back. Cards travel as {"Suit": "Heart", "Number": 14,
"Symbol": "A"}; every server reply is wrapped in {"hasError", "fault",
"data"} where data is itself a JSON string.

Decoding is strict: unknown suit, rank or state tokens and missing keys
raise ParsingError, so a malformed snapshot never reaches a strategy.
"""

import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from hearts.errors import GameServerError, ParsingError
from hearts.game.cards import Card, Rank, Suit
from hearts.game.deal import Deal, DealCard
from hearts.game.status import (
    GameInstanceState,
    GameParticipant,
    GameStatus,
    HeartsGameInstanceState,
    RoundParameters,
    RoundState,
)

logger = logging.getLogger(__name__)


def _require(document: Dict[str, Any], key: str, source: str) -> Any:
    try:
        return document[key]
    except (KeyError, TypeError):
        raise ParsingError(source, f"missing field {key}") from None


# ============================================================================
# Cards
# ============================================================================


def card_from_wire(document: Dict[str, Any]) -> Card:
    """
    Decode a wire card.

    The numeric rank is authoritative; the Symbol field is optional but must
    agree with Number when present.

    Raises:
        ParsingError: On unknown suit or rank tokens
    """
    suit = Suit.from_name(_require(document, "Suit", "Card"))
    number = _require(document, "Number", "Card")
    if isinstance(number, str) and number.isdigit():
        number = int(number)
    rank = Rank.from_number(number)
    symbol = document.get("Symbol")
    if symbol is not None and Rank.from_symbol(str(symbol)) != rank:
        raise ParsingError("Card", f"{symbol} does not match number {number}")
    return Card(suit, rank)


def card_to_wire(card: Card) -> Dict[str, Any]:
    return {
        "Suit": card.suit.wire_name,
        "Number": card.value,
        "Symbol": card.rank.symbol,
    }


def cards_from_wire(documents: Optional[Iterable[Dict[str, Any]]]) -> List[Card]:
    return [card_from_wire(document) for document in documents or []]


def cards_to_wire(cards: Iterable[Card]) -> List[Dict[str, Any]]:
    return [card_to_wire(card) for card in sorted(cards)]


# ============================================================================
# Deals
# ============================================================================


def deal_from_wire(document: Dict[str, Any]) -> Deal:
    """
    Decode a completed or in-progress deal.

    SuitType is only meaningful once a card has been played; the server
    sends a placeholder otherwise, which is ignored.
    """
    deal_cards = tuple(
        DealCard(
            player_name=_require(entry, "TeamName", "DealCard"),
            card=card_from_wire(_require(entry, "Card", "DealCard")),
        )
        for entry in document.get("DealCards") or []
    )
    suit = None
    if deal_cards:
        suit = Suit.from_name(_require(document, "SuitType", "Deal"))
    return Deal(
        deal_number=int(_require(document, "DealNumber", "Deal")),
        initiator=document.get("Initiator") or None,
        suit=suit,
        deal_cards=deal_cards,
        deal_winner=document.get("DealWinner") or None,
    )


def deal_to_wire(deal: Deal) -> Dict[str, Any]:
    document = {
        "DealNumber": deal.deal_number,
        "Initiator": deal.initiator,
        "SuitType": (deal.suit or Suit.CLUB).wire_name,
        "DealCards": [
            {"TeamName": dc.player_name, "Card": card_to_wire(dc.card)}
            for dc in deal.deal_cards
        ],
    }
    if deal.deal_winner is not None:
        document["DealWinner"] = deal.deal_winner
    return document


# ============================================================================
# Snapshot
# ============================================================================


def round_parameters_from_wire(document: Dict[str, Any]) -> RoundParameters:
    card_points = {}
    for entry in document.get("CardPoints") or []:
        card = card_from_wire(_require(entry, "Card", "CardPoints"))
        card_points[card] = int(_require(entry, "Point", "CardPoints"))
    return RoundParameters(
        round_id=int(document.get("RoundId", 0)),
        initiation_phase_in_seconds=int(document.get("InitiationPhaseInSeconds", 0)),
        passing_phase_in_seconds=int(document.get("PassingPhaseInSeconds", 0)),
        dealing_phase_in_seconds=int(document.get("DealingPhaseInSeconds", 0)),
        finishing_phase_in_seconds=int(document.get("FinishingPhaseInSeconds", 0)),
        number_of_cards_to_be_passed=int(
            _require(document, "NumberOfCardsTobePassed", "RoundParameters")
        ),
        card_points=card_points,
    )


def round_parameters_to_wire(parameters: RoundParameters) -> Dict[str, Any]:
    return {
        "RoundId": parameters.round_id,
        "InitiationPhaseInSeconds": parameters.initiation_phase_in_seconds,
        "PassingPhaseInSeconds": parameters.passing_phase_in_seconds,
        "DealingPhaseInSeconds": parameters.dealing_phase_in_seconds,
        "FinishingPhaseInSeconds": parameters.finishing_phase_in_seconds,
        "NumberOfCardsTobePassed": parameters.number_of_cards_to_be_passed,
        "CardPoints": [
            {"Card": card_to_wire(card), "Point": points}
            for card, points in sorted(parameters.card_points.items())
        ],
    }


def participant_from_wire(document: Dict[str, Any]) -> GameParticipant:
    return GameParticipant(
        team_name=_require(document, "TeamName", "GameParticipant"),
        left_participant=document.get("LeftParticipant") or "",
        number_of_cards_in_hand=int(document.get("NumberOfCardsInHand", 0)),
        has_turn=bool(document.get("HasTurn", False)),
        current_score=int(document.get("CurrentScore", 0)),
    )


def participant_to_wire(participant: GameParticipant) -> Dict[str, Any]:
    return {
        "TeamName": participant.team_name,
        "LeftParticipant": participant.left_participant,
        "NumberOfCardsInHand": participant.number_of_cards_in_hand,
        "HasTurn": participant.has_turn,
        "CurrentScore": participant.current_score,
    }


def game_status_from_wire(document: Dict[str, Any]) -> GameStatus:
    """
    Decode a full game status document.

    Args:
        document: Parsed JSON object as returned in the response data

    Returns:
        GameStatus snapshot

    Raises:
        ParsingError: On any missing field or unknown token
    """
    in_progress = document.get("MyInProgressDeal")
    return GameStatus(
        current_game_id=str(_require(document, "CurrentGameId", "GameStatus")),
        current_game_state=GameInstanceState.from_wire(
            _require(document, "CurrentGameState", "GameStatus")
        ),
        current_round_id=int(_require(document, "CurrentRoundId", "GameStatus")),
        current_round_state=RoundState.from_wire(
            _require(document, "CurrentRoundState", "GameStatus")
        ),
        round_parameters=round_parameters_from_wire(
            _require(document, "RoundParameters", "GameStatus")
        ),
        game_state=HeartsGameInstanceState.from_wire(
            document.get("MyGameState") or HeartsGameInstanceState.NOT_STARTED.value
        ),
        game_state_description=document.get("MyGameStateDescription") or "",
        game_players=tuple(
            participant_from_wire(entry)
            for entry in document.get("MyGameParticipants") or []
        ),
        my_initial_hand=frozenset(cards_from_wire(document.get("MyInitialHand"))),
        cards_passed_by_me=frozenset(cards_from_wire(document.get("CardsPassedByMe"))),
        cards_passed_to_me=frozenset(cards_from_wire(document.get("CardsPassedToMe"))),
        my_final_hand=frozenset(cards_from_wire(document.get("MyFinalHand"))),
        my_current_hand=frozenset(cards_from_wire(document.get("MyCurrentHand"))),
        game_deals=tuple(
            deal_from_wire(entry) for entry in document.get("MyGameDeals") or []
        ),
        in_progress_deal=deal_from_wire(in_progress) if in_progress else None,
        is_my_turn=bool(document.get("IsMyTurn", False)),
    )


def game_status_to_wire(status: GameStatus) -> Dict[str, Any]:
    """Encode a snapshot in the server's layout (for game logs and replay)."""
    return {
        "CurrentGameId": status.current_game_id,
        "CurrentGameState": status.current_game_state.value,
        "CurrentRoundId": status.current_round_id,
        "CurrentRoundState": status.current_round_state.value,
        "RoundParameters": round_parameters_to_wire(status.round_parameters),
        "MyGameState": status.game_state.value,
        "MyGameStateDescription": status.game_state_description,
        "MyGameParticipants": [participant_to_wire(p) for p in status.game_players],
        "MyInitialHand": cards_to_wire(status.my_initial_hand),
        "CardsPassedByMe": cards_to_wire(status.cards_passed_by_me),
        "CardsPassedToMe": cards_to_wire(status.cards_passed_to_me),
        "MyFinalHand": cards_to_wire(status.my_final_hand),
        "MyCurrentHand": cards_to_wire(status.my_current_hand),
        "MyGameDeals": [deal_to_wire(deal) for deal in status.game_deals],
        "MyInProgressDeal": (
            deal_to_wire(status.in_progress_deal)
            if status.in_progress_deal is not None
            else None
        ),
        "IsMyTurn": status.is_my_turn,
    }


def _loads(text: str, source: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParsingError(source, f"invalid JSON ({e})") from e


def parse_game_status(text: str) -> GameStatus:
    """Decode the JSON text of a game status document."""
    return game_status_from_wire(_loads(text, "GameStatus"))


def parse_game_response(text: str) -> str:
    """
    Unwrap a server response envelope.

    Args:
        text: Raw response body

    Returns:
        The data payload (itself usually JSON text)

    Raises:
        GameServerError: If hasError is set
        ParsingError: If the envelope is malformed
    """
    envelope = _loads(text, "GameResponse")
    if _require(envelope, "hasError", "GameResponse"):
        fault = envelope.get("fault") or "Unknown server error"
        logger.warning(f"Server fault: {fault}")
        raise GameServerError(fault)
    return envelope.get("data") or ""


def load_game_status(filepath: str) -> GameStatus:
    """Read a logged snapshot file."""
    with open(filepath, "r", encoding="utf-8") as f:
        return parse_game_status(f.read())


def save_game_status(status: GameStatus, filepath: str):
    """Write a snapshot in wire layout, pretty-printed."""
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(game_status_to_wire(status), f, indent=2, ensure_ascii=False)
