import logging
import random
from typing import Sequence

from poll_tracker.model import DEFAULT_NUM_SEATS, Party, Poll, PollList, party_key

logger = logging.getLogger(__name__)

DEFAULT_PARTY_NAMES = ("BQ", "CPC", "Green", "LPC", "NDP", "PPC", "Rhinoceros")

# How far (in percentage points) the vote share may drift from the seat share.
VOTE_SPREAD = 5


class PollGenerator:
    """
    Generates random, internally consistent polls for one election.

    Every generated poll divides exactly `num_seats` seats and 100% of the vote
    between all parties, and each party's vote share stays within a few points
    of its seat share.

    Pass `randomobj` (a `random.Random` compatible object) or `randomseed`
    to make the output reproducible.
    """

    def __init__(
        self,
        num_seats: int,
        party_names: Sequence[str] | None = None,
        *,
        randomobj: random.Random | None = None,
        randomseed=None,
    ):
        if num_seats < 1:
            logger.warning(
                f"Number of seats should be at least 1, got {num_seats}. "
                f"Number of seats set to {DEFAULT_NUM_SEATS}."
            )
            num_seats = DEFAULT_NUM_SEATS
        self.num_seats = num_seats

        if randomobj is None:
            randomobj = random.Random(randomseed)
        self.randomobj = randomobj

        self._party_names: list[str] = list(DEFAULT_PARTY_NAMES)
        if party_names is not None:
            self.party_names = party_names

    @property
    def party_names(self) -> list[str]:
        return list(self._party_names)

    @party_names.setter
    def party_names(self, names: Sequence[str] | None):
        if not names:
            logger.warning("No party names given, keeping the current ones.")
            return
        self._party_names = unique_names(names)

    def generate_party(self, name: str, max_seats: int, max_percent: int) -> Party:
        """
        A party projected to win between 0 and `max_seats` seats and at most `max_percent`
        percent of the vote, the vote being within `VOTE_SPREAD` points of the seat share.
        """
        seats = self.randomobj.randint(0, max_seats)

        seat_share_percent = seats * 100 // self.num_seats
        lowest = max(0, seat_share_percent - VOTE_SPREAD)
        highest = max(0, seat_share_percent + VOTE_SPREAD)

        # A collapsed band still has to leave one value to draw.
        span = max(highest - lowest, 1)
        percent = min(max_percent, lowest + self.randomobj.randrange(span))

        logger.debug(
            f"{name}: {seats} of at most {max_seats} seats ({seat_share_percent}% of all), "
            f"{percent}% of votes (band {lowest}..{lowest + span - 1}, at most {max_percent}%)."
        )
        return Party(name, seats, percent / 100)

    def generate_poll(self, name: str, party_names: Sequence[str] | None = None) -> Poll:
        """
        Parties are drawn in random order, each against whatever seats and percent are
        still left. The last party gets everything that remains.
        """
        names = unique_names(party_names) if party_names else list(self._party_names)
        poll = Poll(name, max_parties=len(names))

        seats_left = self.num_seats
        percent_left = 100
        while len(names) > 1:
            party_name = names.pop(self.randomobj.randrange(len(names)))
            party = self.generate_party(party_name, seats_left, percent_left)
            poll.add_party(party)

            seats_left -= int(party.seats)
            percent_left -= party.vote_percent

        poll.add_party(Party(names[0], seats_left, percent_left / 100))

        logger.info(f"Generated poll {name!r} with {poll.num_parties} parties.")
        return poll

    def generate_poll_list(self, num_polls: int, party_names: Sequence[str] | None = None) -> PollList:
        poll_list = PollList(num_polls, self.num_seats)
        for i in range(poll_list.num_polls):
            poll_list.add_poll(self.generate_poll(f"Poll{i}", party_names))
        return poll_list


def unique_names(names: Sequence[str]) -> list[str]:
    """
    Drops case-insensitive duplicates, the first spelling wins.
    """
    seen = set()
    result = []
    for name in names:
        if party_key(name) in seen:
            logger.warning(f"Duplicate party name {name!r} ignored.")
            continue
        seen.add(party_key(name))
        result.append(name)
    return result
