import logging
import math
from typing import Self

logger = logging.getLogger(__name__)

PartyKey = str

MAX_STARS_FOR_VISUALIZATION = 18

DEFAULT_MAX_PARTIES = 10
DEFAULT_NUM_POLLS = 5
DEFAULT_NUM_SEATS = 10


def party_key(name: str) -> PartyKey:
    """
    Party names are compared case-insensitively inside a poll.
    """
    return name.casefold()


class Party:
    """
    A party's projection in one poll: seats and vote share (0..1).
    """

    def __init__(self, name: str, seats: float = 0.0, votes: float = 0.0, *, colour: str | None = None):
        self.name = name

        # Only for display, e.g. "#eb5757".
        self.colour = colour

        self._seats = 0.0
        self._votes = 0.0
        self.seats = seats
        self.votes = votes

    @property
    def seats(self) -> float:
        return self._seats

    @seats.setter
    def seats(self, value: float):
        if value < 0:
            logger.warning(f"Party {self.name!r}: seats cannot be negative ({value}), keeping {self._seats}.")
            return
        self._seats = float(value)

    @property
    def votes(self) -> float:
        return self._votes

    @votes.setter
    def votes(self, value: float):
        if value < 0 or value > 1:
            logger.warning(f"Party {self.name!r}: vote share must be between 0.0 and 1.0, got {value}, using 0.0.")
            value = 0.0
        self._votes = float(value)

    @property
    def key(self) -> PartyKey:
        return party_key(self.name)

    @property
    def vote_percent(self) -> int:
        # 0.29 * 100 == 28.999999999999996
        return math.floor(round(self._votes * 100, 6))

    def projected_percent_of_seats(self, total_seats: int) -> float:
        if total_seats <= 0:
            logger.warning(f"Number of seats must be at least 1, got {total_seats}.")
            return 0.0
        return self._seats / total_seats

    def __str__(self):
        if self.colour is not None:
            return f"{self.name} ([{self.colour}], {self.vote_percent}% of votes, {self._seats} seats)"
        return f"{self.name} ({self.vote_percent}% of votes, {self._seats} seats)"

    def __repr__(self):
        return f"Party(name={self.name!r}, seats={self._seats}, votes={self._votes})"


class Poll:
    """
    One poll of an election: up to `max_parties` parties, kept in the order they were added.
    Adding a party whose name is already present replaces it in place.
    """

    def __init__(self, name: str, max_parties: int = DEFAULT_MAX_PARTIES):
        self.name = name

        if max_parties < 1:
            logger.warning(
                f"Poll {name!r}: poll size must be at least 1, got {max_parties}. "
                f"Poll size set to {DEFAULT_MAX_PARTIES}."
            )
            max_parties = DEFAULT_MAX_PARTIES
        self.max_parties = max_parties

        self._parties: dict[PartyKey, Party] = {}

    @classmethod
    def from_parties(cls, name: str, parties: list[Party]) -> Self:
        poll = cls(name, max_parties=max(len(parties), 1))
        for party in parties:
            poll.add_party(party)
        return poll

    @property
    def parties(self) -> list[Party]:
        return list(self._parties.values())

    @property
    def num_parties(self) -> int:
        return len(self._parties)

    @property
    def is_full(self) -> bool:
        return len(self._parties) >= self.max_parties

    def add_party(self, party: Party | None) -> bool:
        if party is None:
            logger.warning(f"Poll {self.name!r}: cannot add a missing party.")
            return False

        if party.key in self._parties:
            self._parties[party.key] = party
            return True

        if self.is_full:
            logger.warning(f"Poll {self.name!r} is full, cannot add party {party.name!r}.")
            return False

        self._parties[party.key] = party
        return True

    def get_party(self, name: str) -> Party | None:
        party = self._parties.get(party_key(name))
        if party is None:
            logger.warning(f"No party with name {name!r} is in poll {self.name!r}.")
        return party

    def __contains__(self, name: str) -> bool:
        return party_key(name) in self._parties

    def __str__(self):
        lines = [self.name]
        lines.extend(str(party) for party in self._parties.values())
        return "\n".join(lines) + "\n"


class PollList:
    """
    Polls collected for the same election.

    Seat visualizations of every poll in the list share one scale (`seats_per_star`),
    so bars can be compared between polls.
    """

    def __init__(self, num_polls: int, num_seats: int):
        if num_polls < 1:
            logger.warning(
                f"Number of polls should be at least 1, got {num_polls}. "
                f"Number of polls set to {DEFAULT_NUM_POLLS}."
            )
            num_polls = DEFAULT_NUM_POLLS

        if num_seats < 1:
            logger.warning(
                f"Number of seats should be at least 1, got {num_seats}. "
                f"Number of seats set to {DEFAULT_NUM_SEATS}."
            )
            num_seats = DEFAULT_NUM_SEATS

        self.num_polls = num_polls
        self.num_seats = num_seats
        self._polls: list[Poll] = []

    @property
    def polls(self) -> list[Poll]:
        return list(self._polls)

    @property
    def is_full(self) -> bool:
        return len(self._polls) >= self.num_polls

    def add_poll(self, poll: Poll | None) -> bool:
        if poll is None:
            logger.warning("Cannot add a missing poll to the list.")
            return False
        if self.is_full:
            logger.warning(f"Poll list is full ({self.num_polls}), cannot add poll {poll.name!r}.")
            return False
        self._polls.append(poll)
        return True

    def seats_per_star(self) -> int:
        return math.ceil(self.num_seats / MAX_STARS_FOR_VISUALIZATION)

    @staticmethod
    def votes_per_star() -> int:
        return 100 // MAX_STARS_FOR_VISUALIZATION + 1

    def average_party(self, name: str) -> Party:
        """
        Average seats and vote share of the party over the polls that include it.
        """
        containing = [poll.get_party(name) for poll in self._polls if name in poll]
        if not containing:
            return Party(name, 0.0, 0.0)

        return Party(
            name,
            sum(p.seats for p in containing) / len(containing),
            sum(p.votes for p in containing) / len(containing),
        )

    def aggregate(self, party_names: list[str]) -> Poll:
        aggregate_poll = Poll("Aggregate", max_parties=max(len(party_names), 1))
        for name in party_names:
            aggregate_poll.add_party(self.average_party(name))
        return aggregate_poll

    def __str__(self):
        from poll_tracker.visualization import render_poll_list

        return f"Number of seats: {self.num_seats}\n" + render_poll_list(self, "seats")
