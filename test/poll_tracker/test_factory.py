import logging
import random

import pytest

from poll_tracker.factory import DEFAULT_PARTY_NAMES, PollGenerator


def as_tuples(poll):
    return [(p.name, p.seats, p.votes) for p in poll.parties]


@pytest.mark.parametrize("seed", range(20))
@pytest.mark.parametrize("num_seats, party_names", [
    (338, DEFAULT_PARTY_NAMES),
    (100, ("A", "B")),
    (7, ("A", "B", "C", "D", "E")),
    (1, ("A", "B", "C")),
])
def test_generated_poll_uses_all_seats_and_votes(seed, num_seats, party_names):
    generator = PollGenerator(num_seats, party_names, randomseed=seed)
    poll = generator.generate_poll("P")

    assert poll.num_parties == len(party_names)
    assert {p.name for p in poll.parties} == set(party_names)
    assert sum(p.seats for p in poll.parties) == num_seats
    assert sum(p.votes for p in poll.parties) == pytest.approx(1.0)

    for party in poll.parties:
        assert 0 <= party.seats <= num_seats
        assert 0 <= party.votes <= 1


def test_same_seed_gives_same_poll():
    first = PollGenerator(338, randomseed=123).generate_poll("P")
    second = PollGenerator(338, randomseed=123).generate_poll("P")
    assert as_tuples(first) == as_tuples(second)


def test_injected_random_object_is_used():
    first = PollGenerator(338, randomobj=random.Random(7)).generate_poll_list(3)
    second = PollGenerator(338, randomobj=random.Random(7)).generate_poll_list(3)
    assert [as_tuples(p) for p in first.polls] == [as_tuples(p) for p in second.polls]


@pytest.mark.parametrize("seed", range(10))
def test_two_parties_last_one_gets_the_rest(seed):
    generator = PollGenerator(100, ["A", "B"], randomseed=seed)
    poll = generator.generate_poll("P")

    first, last = poll.parties
    assert last.seats == 100 - first.seats
    assert last.votes == pytest.approx(1.0 - first.votes)


@pytest.mark.parametrize("seed", range(30))
def test_random_party_vote_share_stays_near_seat_share(seed):
    generator = PollGenerator(200, randomseed=seed)
    party = generator.generate_party("A", max_seats=120, max_percent=100)

    assert 0 <= party.seats <= 120
    assert party.seats == int(party.seats)

    seat_share_percent = int(party.seats) * 100 // 200
    assert max(0, seat_share_percent - 5) <= party.vote_percent <= seat_share_percent + 4


@pytest.mark.parametrize("seed", range(10))
def test_random_party_vote_share_is_capped(seed):
    generator = PollGenerator(10, randomseed=seed)
    party = generator.generate_party("A", max_seats=10, max_percent=3)
    assert party.vote_percent <= 3


def test_random_party_without_seats_left():
    generator = PollGenerator(10, randomseed=1)
    party = generator.generate_party("A", max_seats=0, max_percent=0)
    assert (party.seats, party.votes) == (0.0, 0.0)


def test_poll_list_has_sequentially_named_polls():
    generator = PollGenerator(50, ["A", "B", "C"], randomseed=3)
    poll_list = generator.generate_poll_list(4)

    assert poll_list.num_polls == 4
    assert poll_list.num_seats == 50
    assert [p.name for p in poll_list.polls] == ["Poll0", "Poll1", "Poll2", "Poll3"]
    assert poll_list.is_full


def test_poll_list_with_no_polls_falls_back_to_default_size():
    poll_list = PollGenerator(50, randomseed=3).generate_poll_list(0)
    assert len(poll_list.polls) == 5


def test_party_names_passed_to_generate_poll_override_defaults():
    generator = PollGenerator(10, randomseed=1)
    poll = generator.generate_poll("P", ["X", "Y"])
    assert {p.name for p in poll.parties} == {"X", "Y"}


def test_non_positive_seat_count_falls_back_to_ten(caplog):
    with caplog.at_level(logging.WARNING):
        generator = PollGenerator(0)
    assert generator.num_seats == 10
    assert "Number of seats set to 10" in caplog.text


def test_duplicate_party_names_are_dropped(caplog):
    with caplog.at_level(logging.WARNING):
        generator = PollGenerator(10, ["NDP", "ndp", "CPC"])
    assert generator.party_names == ["NDP", "CPC"]
    assert "Duplicate party name 'ndp'" in caplog.text


def test_empty_party_names_keep_current_ones():
    generator = PollGenerator(10, ["A", "B"])
    generator.party_names = []
    assert generator.party_names == ["A", "B"]
    assert PollGenerator(10).party_names == list(DEFAULT_PARTY_NAMES)
