from itertools import combinations

import pytest

from tourneycore.constants import DRAW
from tourneycore.controllers.tournament.roster import ParticipantRoster
from tourneycore.controllers.tournament.round_robin_scheduler import (
    RoundRobinScheduler,
)
from tourneycore.exceptions import (
    AlreadyResolvedException,
    CorrectionNotAllowedException,
    InsufficientParticipantsException,
    InvalidWinnerException,
    MatchNotFoundException,
)
from tourneycore.models.participant.participant import Participant


def _participants(count):
    roster = ParticipantRoster()
    for number in range(1, count + 1):
        roster.register(Participant.create(f"p{number}", f"Player {number}"))
    return roster.list()


def _match_between(schedule, first, second):
    for match in schedule.matches:
        if set(match.participant_ids) == {first, second}:
            return match
    raise AssertionError(f"No match between {first} and {second}")


def test_four_participants_six_matches_three_rounds():
    schedule = RoundRobinScheduler().build(_participants(4))

    assert len(schedule.matches) == 6
    assert schedule.num_rounds == 3
    for round_number in (1, 2, 3):
        assert len(schedule.round_matches(round_number)) == 2
    assert [m.match_id for m in schedule.matches] == [f"M{n}" for n in range(1, 7)]


def test_three_participants_skip_bye_pairings():
    schedule = RoundRobinScheduler().build(_participants(3))

    assert len(schedule.matches) == 3
    assert schedule.num_rounds == 3
    assert all(len(m.participant_ids) == 2 for m in schedule.matches)
    assert not any(m.has_bye for m in schedule.matches)


@pytest.mark.parametrize("count", range(2, 10))
def test_every_pair_meets_exactly_once(count):
    participants = _participants(count)
    schedule = RoundRobinScheduler().build(participants)

    pairs = [frozenset(m.participant_ids) for m in schedule.matches]
    expected = {frozenset(p) for p in combinations([p.id for p in participants], 2)}

    assert len(pairs) == count * (count - 1) // 2
    assert set(pairs) == expected
    assert schedule.num_rounds == (count - 1 if count % 2 == 0 else count)

    for round_number in range(1, schedule.num_rounds + 1):
        ids = [
            pid
            for m in schedule.round_matches(round_number)
            for pid in m.participant_ids
        ]
        assert len(ids) == len(set(ids))


def test_build_requires_two_participants():
    with pytest.raises(InsufficientParticipantsException):
        RoundRobinScheduler().build(_participants(1))


def test_submit_win_and_draw():
    scheduler = RoundRobinScheduler()
    schedule = scheduler.build(_participants(3))
    win = _match_between(schedule, "p1", "p2")
    draw = _match_between(schedule, "p2", "p3")

    scheduler.submit_result(schedule, win.match_id, "p2", [2, 1])
    scheduler.submit_result(schedule, draw.match_id, DRAW)

    assert win.winner_id == "p2"
    assert win.loser_id == "p1"
    assert draw.is_completed
    assert draw.is_draw
    assert draw.winner_id is None
    assert not schedule.is_complete


def test_submit_errors_leave_match_unplayed():
    scheduler = RoundRobinScheduler()
    schedule = scheduler.build(_participants(4))
    match = _match_between(schedule, "p1", "p2")

    with pytest.raises(MatchNotFoundException):
        scheduler.submit_result(schedule, "M99", "p1")
    with pytest.raises(InvalidWinnerException):
        scheduler.submit_result(schedule, match.match_id, "p3")
    assert not match.is_completed

    scheduler.submit_result(schedule, match.match_id, "p1")
    with pytest.raises(AlreadyResolvedException):
        scheduler.submit_result(schedule, match.match_id, DRAW)
    assert match.winner_id == "p1"
    assert not match.is_draw


def test_withdraw_forfeits_unplayed_matches():
    scheduler = RoundRobinScheduler()
    schedule = scheduler.build(_participants(4))
    played = _match_between(schedule, "p1", "p2")
    scheduler.submit_result(schedule, played.match_id, "p1")

    forfeited = scheduler.withdraw(schedule, "p1")

    assert len(forfeited) == 2
    assert played.winner_id == "p1"
    assert not played.is_walkover
    for match in forfeited:
        assert match.is_walkover
        assert match.winner_id == match.opponent_of("p1")


def test_correct_result():
    scheduler = RoundRobinScheduler()
    schedule = scheduler.build(_participants(4))
    match = _match_between(schedule, "p3", "p4")

    with pytest.raises(CorrectionNotAllowedException):
        scheduler.correct_result(schedule, match.match_id, "p3")

    scheduler.submit_result(schedule, match.match_id, "p3")
    scheduler.correct_result(schedule, match.match_id, DRAW, [1, 1])
    assert match.is_draw
    assert match.score == [1, 1]

    scheduler.withdraw(schedule, "p1")
    walkover = _match_between(schedule, "p1", "p2")
    with pytest.raises(CorrectionNotAllowedException):
        scheduler.correct_result(schedule, walkover.match_id, "p1")
