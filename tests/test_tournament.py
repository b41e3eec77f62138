import threading

import pytest

from tourneycore.constants import DRAW
from tourneycore.exceptions import (
    AlreadyResolvedException,
    DuplicateParticipantException,
    InsufficientParticipantsException,
    InvalidConfigurationException,
    InvalidParticipantDataException,
    InvalidTransitionException,
    InvalidWinnerException,
    NotActiveException,
    RegistrationClosedException,
    RosterFullException,
    WrongFormatException,
)
from tourneycore.models.tournament.tournament import Tournament


def _tournament(count, **settings):
    tournament = Tournament(name="Test Cup", **settings)
    for number in range(1, count + 1):
        tournament.add_participant(f"p{number}", f"Player {number}")
    return tournament


def _match_between(tournament, first, second):
    for match in tournament.get_matches():
        if set(match.participant_ids) == {first, second}:
            return match
    raise AssertionError(f"No match between {first} and {second}")


def test_new_tournament_defaults():
    tournament = Tournament()

    assert tournament.status == "registration"
    assert tournament.tournament_format == "single-elimination"
    assert tournament.config.min_participants == 4
    assert tournament.points_system.to_dict() == {"win": 3, "loss": 0, "draw": 1}
    assert tournament.id.startswith("tournament_")
    assert tournament.get_matches() == []
    assert tournament.get_winner() is None


def test_invalid_configuration():
    with pytest.raises(InvalidConfigurationException):
        Tournament(tournament_format="double-elimination")
    with pytest.raises(InvalidConfigurationException):
        Tournament(tournament_format="swiss")
    with pytest.raises(InvalidConfigurationException):
        Tournament(min_participants=1)
    with pytest.raises(InvalidConfigurationException):
        Tournament(min_participants=4, max_participants=3)
    with pytest.raises(InvalidConfigurationException):
        Tournament(name="   ")


def test_registration_errors():
    tournament = _tournament(2, max_participants=4)

    with pytest.raises(DuplicateParticipantException):
        tournament.add_participant("p1", "Again")
    with pytest.raises(InvalidParticipantDataException):
        tournament.add_participant("draw", "Reserved")

    tournament.add_participant("p3", "Player 3")
    tournament.add_participant("p4", "Player 4")
    with pytest.raises(RosterFullException):
        tournament.add_participant("p5", "Player 5")


def test_start_requires_minimum_participants():
    tournament = _tournament(3)

    with pytest.raises(InsufficientParticipantsException):
        tournament.start()
    assert tournament.status == "registration"
    assert tournament.roster.is_open

    tournament.add_participant("p4", "Player 4")
    tournament.start()
    assert tournament.status == "active"


def test_start_closes_registration():
    tournament = _tournament(4).start()

    assert tournament.current_round == 1
    assert not tournament.roster.is_open
    with pytest.raises(RegistrationClosedException):
        tournament.add_participant("p5", "Player 5")
    with pytest.raises(InvalidTransitionException):
        tournament.start()


def test_single_elimination_lifecycle():
    tournament = _tournament(4).start()

    tournament.submit_result("R1M1", "p1", [3, 1])
    assert tournament.current_round == 1
    tournament.submit_result("R1M2", "p3", [2, 0])
    assert tournament.current_round == 2

    tournament.submit_result("R2M1", "p1")
    assert tournament.status == "completed"
    assert tournament.winner_id == "p1"
    assert tournament.get_winner().name == "Player 1"

    with pytest.raises(NotActiveException):
        tournament.submit_result("R2M1", "p3")


def test_five_participants_start_state():
    tournament = _tournament(5).start()

    assert tournament.current_round == 1
    assert [m.match_id for m in tournament.get_pending_matches()] == ["R1M4", "R2M1"]

    bracket = tournament.get_bracket()
    assert [len(r) for r in bracket] == [4, 2, 1]
    assert bracket[0][0]["winner_id"] == "p1"
    assert bracket[0][0]["slots"][1]["is_bye"] is True


def test_three_participants_final_not_auto_resolved():
    tournament = _tournament(3, min_participants=2).start()
    tournament.submit_result("R1M2", "p2")

    final = tournament.get_match("R2M1")
    assert final.participant_ids == ["p1", "p2"]
    assert not final.is_completed
    assert tournament.status == "active"
    assert tournament.current_round == 2


def test_two_participant_tournament():
    tournament = _tournament(2, min_participants=2).start()

    assert [m.match_id for m in tournament.get_pending_matches()] == ["R1M1"]
    tournament.submit_result("R1M1", "p2")
    assert tournament.winner_id == "p2"


def test_resubmission_is_rejected_without_side_effects():
    tournament = _tournament(4).start()
    tournament.submit_result("R1M1", "p1")
    snapshot = tournament.to_dict()

    with pytest.raises(AlreadyResolvedException):
        tournament.submit_result("R1M1", "p2")

    assert tournament.to_dict() == snapshot


def test_invalid_winner_leaves_match_unresolved():
    tournament = _tournament(4).start()
    snapshot = tournament.to_dict()

    with pytest.raises(InvalidWinnerException):
        tournament.submit_result("R1M1", "p3")

    assert not tournament.get_match("R1M1").is_completed
    assert tournament.to_dict() == snapshot


def test_cancel():
    tournament = _tournament(4).start()
    tournament.cancel()

    assert tournament.status == "cancelled"
    assert tournament.is_finished
    with pytest.raises(NotActiveException):
        tournament.submit_result("R1M1", "p1")
    with pytest.raises(InvalidTransitionException):
        tournament.cancel()
    with pytest.raises(InvalidTransitionException):
        tournament.start()


def test_cancel_during_registration():
    tournament = _tournament(2).cancel()

    assert tournament.status == "cancelled"
    with pytest.raises(RegistrationClosedException):
        tournament.add_participant("p3", "Player 3")


def test_round_robin_lifecycle():
    tournament = _tournament(4, tournament_format="round-robin").start()

    assert len(tournament.get_matches()) == 6
    assert [s["points"] for s in tournament.get_standings()] == [0, 0, 0, 0]

    for other in ("p2", "p3", "p4"):
        tournament.submit_result(_match_between(tournament, "p1", other).match_id, "p1")
    tournament.submit_result(_match_between(tournament, "p2", "p3").match_id, DRAW)
    tournament.submit_result(_match_between(tournament, "p2", "p4").match_id, "p4")
    assert tournament.status == "active"
    tournament.submit_result(_match_between(tournament, "p3", "p4").match_id, DRAW)

    assert tournament.status == "completed"
    assert tournament.winner_id == "p1"
    standings = tournament.get_standings()
    assert [s["participant_id"] for s in standings] == ["p1", "p4", "p3", "p2"]
    assert [s["points"] for s in standings] == [9, 4, 2, 1]
    assert tournament.current_round == 3


def test_round_robin_all_draws_winner_is_top_seed():
    tournament = _tournament(3, tournament_format="round-robin", min_participants=2)
    tournament.start()
    for match in tournament.get_matches():
        tournament.submit_result(match.match_id, DRAW)

    assert tournament.winner_id == "p1"


def test_projections_check_format():
    bracket_tournament = _tournament(4).start()
    round_robin = _tournament(4, tournament_format="round-robin").start()

    with pytest.raises(WrongFormatException, match="Only elimination tournaments"):
        round_robin.get_bracket()
    with pytest.raises(WrongFormatException):
        bracket_tournament.get_standings()


def test_withdraw_in_bracket_advances_opponent():
    tournament = _tournament(4).start()

    resolved = tournament.withdraw("p2")

    assert [m.match_id for m in resolved] == ["R1M1"]
    assert tournament.get_match("R2M1").participant_ids == ["p1"]
    with pytest.raises(InvalidParticipantDataException):
        tournament.withdraw("nobody")


def test_withdraw_can_complete_tournament():
    tournament = _tournament(4).start()
    tournament.submit_result("R1M1", "p1")
    tournament.submit_result("R1M2", "p4")

    tournament.withdraw("p4")

    assert tournament.status == "completed"
    assert tournament.winner_id == "p1"


def test_withdraw_in_round_robin_updates_standings():
    tournament = _tournament(4, tournament_format="round-robin").start()

    forfeited = tournament.withdraw("p4")

    assert len(forfeited) == 3
    by_id = {s["participant_id"]: s for s in tournament.get_standings()}
    assert by_id["p4"]["losses"] == 3
    assert by_id["p1"]["points"] == 3


def test_withdraw_requires_active_tournament():
    tournament = _tournament(4)
    with pytest.raises(NotActiveException):
        tournament.withdraw("p1")


def test_correct_result_recomputes_standings():
    tournament = _tournament(4, tournament_format="round-robin").start()
    match = _match_between(tournament, "p1", "p2")
    tournament.submit_result(match.match_id, "p1")

    tournament.correct_result(match.match_id, "p2")

    by_id = {s["participant_id"]: s for s in tournament.get_standings()}
    assert by_id["p2"]["points"] == 3
    assert by_id["p1"]["points"] == 0


def test_serialization_round_trip():
    tournament = _tournament(
        5, description="Friday night", start_date=None, max_participants=8
    ).start()
    tournament.submit_result("R1M4", "p5", [1, 0])

    restored = Tournament.from_dict(tournament.to_dict())

    assert restored.to_dict() == tournament.to_dict()
    assert restored.id == tournament.id
    assert restored.get_match("R2M2").participant_ids == ["p3", "p5"]

    restored.submit_result("R2M2", "p3")
    restored.submit_result("R2M1", "p1")
    restored.submit_result("R3M1", "p3")
    assert restored.winner_id == "p3"


def test_round_robin_serialization_round_trip():
    tournament = _tournament(3, tournament_format="round-robin", min_participants=3)
    tournament.start()
    tournament.submit_result("M1", DRAW, {"sets": [6, 6]})

    restored = Tournament.from_dict(tournament.to_dict())

    assert restored.to_dict() == tournament.to_dict()
    assert restored.get_standings() == tournament.get_standings()


def test_concurrent_submissions_apply_once():
    tournament = _tournament(4).start()
    errors = []
    applied = []

    def submit(winner):
        try:
            tournament.submit_result("R1M1", winner)
            applied.append(winner)
        except AlreadyResolvedException as e:
            errors.append(e)

    threads = [
        threading.Thread(target=submit, args=("p1" if i % 2 else "p2",))
        for i in range(8)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(applied) == 1
    assert len(errors) == 7
    assert tournament.get_match("R1M1").winner_id == applied[0]
