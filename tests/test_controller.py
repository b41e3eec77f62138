import json

import pytest

from tourneycore.controllers.tournament_controller import (
    OperationResult,
    TournamentController,
)
from tourneycore.exceptions import InvalidConfigurationException


def _controller(count, **settings):
    controller = TournamentController.new({"name": "Club Night", **settings})
    for number in range(1, count + 1):
        assert controller.register(f"p{number}", f"Player {number}")
    return controller


def test_operation_result_dict_forms():
    ok = OperationResult.ok({"id": "x"})
    failed = OperationResult(success=False, error_kind="NotActive", message="nope")

    assert ok.to_dict() == {"success": True, "data": {"id": "x"}}
    assert failed.to_dict() == {
        "success": False,
        "error": {"kind": "NotActive", "message": "nope"},
    }
    assert bool(ok)
    assert not failed


def test_new_rejects_invalid_settings():
    with pytest.raises(InvalidConfigurationException):
        TournamentController.new({"tournament_format": "double-elimination"})


def test_register_returns_seeded_participant():
    controller = _controller(1)

    result = controller.register("p2", "Player 2", ["Ann", "Bo"])

    assert result.success
    assert result.data["seed"] == 2
    assert result.data["team_members"] == ["Ann", "Bo"]


def test_errors_are_reduced_to_kind_and_message():
    controller = _controller(2)

    duplicate = controller.register("p1", "Again")
    assert not duplicate.success
    assert duplicate.error_kind == "DuplicateParticipant"
    assert "p1" in duplicate.message

    start = controller.start()
    assert start.error_kind == "InsufficientParticipants"
    assert controller.tournament.status == "registration"


def test_bracket_flow():
    controller = _controller(4)
    assert controller.start().data["status"] == "active"

    pending = controller.get_pending_matches().data
    assert [m["match_id"] for m in pending] == ["R1M1", "R1M2"]

    result = controller.submit_result("R1M1", "p1", [2, 1])
    assert result.data["winner_id"] == "p1"
    assert result.data["score"] == [2, 1]

    again = controller.submit_result("R1M1", "p2")
    assert again.error_kind == "AlreadyResolved"

    assert controller.submit_result("R1M2", "p9").error_kind == "InvalidWinner"
    assert controller.submit_result("R7M1", "p1").error_kind == "MatchNotFound"
    assert controller.submit_result("R2M1", "p1").error_kind == "MatchNotReady"

    controller.submit_result("R1M2", "p4")
    controller.submit_result("R2M1", "p4")
    assert controller.get_winner().data["id"] == "p4"


def test_wrong_format_projections():
    round_robin = _controller(4, tournament_format="round-robin")
    round_robin.start()
    bracket = _controller(4)
    bracket.start()

    result = round_robin.get_bracket()
    assert result.error_kind == "WrongFormat"
    assert result.message == "Only elimination tournaments have brackets"
    assert bracket.get_standings().error_kind == "WrongFormat"
    assert round_robin.get_standings().success
    assert len(bracket.get_bracket().data) == 2


def test_cancel_then_submit_is_not_active():
    controller = _controller(4)
    controller.start()
    assert controller.cancel().data["status"] == "cancelled"

    result = controller.submit_result("R1M1", "p1")
    assert result.error_kind == "NotActive"
    assert controller.cancel().error_kind == "InvalidTransition"


def test_withdraw_and_correct():
    controller = _controller(4, tournament_format="round-robin")
    controller.start()

    withdrawn = controller.withdraw("p4")
    assert withdrawn.success
    assert len(withdrawn.data) == 3
    assert all(m["is_walkover"] for m in withdrawn.data)

    match_id = withdrawn.data[0]["match_id"]
    assert controller.correct_result(match_id, "p4").error_kind == "CorrectionNotAllowed"
    assert controller.withdraw("ghost").error_kind == "InvalidParticipantData"


def test_payloads_are_json_serialisable():
    controller = _controller(5, start_date="2025-06-01T18:00:00")
    controller.start()
    controller.submit_result("R1M4", "p4", {"sets": [[6, 4], [7, 5]]})

    payload = controller.get_tournament().to_dict()
    text = json.dumps(payload)

    assert json.loads(text)["data"]["config"]["start_date"].startswith("2025-06-01")
    assert json.dumps(controller.get_bracket().to_dict())
