"""
Text visualizations of polls.

Every bar is `max_stars + 1` characters wide: one star per `units_per_star` seats
(or vote percent), padded with spaces, and a `|` divider marking the majority,
i.e. the middle of the bar. A party whose stars continue past the divider is
projected to win a majority.
"""
import logging
import math
from typing import Literal

from poll_tracker.model import MAX_STARS_FOR_VISUALIZATION, Party, Poll, PollList

logger = logging.getLogger(__name__)

By = Literal["seats", "votes"]

STAR = "*"
DIVIDER = "|"
BLANK = " "


def render_bar(value: float, max_stars: int, units_per_star: float, label: str | None = None) -> str:
    if max_stars < 0 or units_per_star < 0:
        logger.warning(f"Cannot visualize with negative values (max_stars={max_stars}, units_per_star={units_per_star}).")
        return ""
    if units_per_star == 0:
        logger.warning("Cannot visualize with zero units per star.")
        return ""

    printed_stars = math.floor(value / units_per_star)
    majority = math.ceil(max_stars / 2)
    blank = max_stars - printed_stars

    if printed_stars > majority:
        bar = STAR * majority + DIVIDER + STAR * (printed_stars - majority) + BLANK * blank
    elif printed_stars == majority:
        bar = STAR * majority + DIVIDER + BLANK * blank
    else:
        bar = STAR * printed_stars + BLANK * (blank - majority) + DIVIDER + BLANK * majority

    if label is None:
        return bar
    return f"{bar} {label}"


def render_party(party: Party, by: By, max_stars: int, units_per_star: float) -> str:
    if by == "seats":
        value = party.seats
    elif by == "votes":
        value = party.vote_percent
    else:
        raise ValueError(f"Unknown visualization type {by!r}, expected 'seats' or 'votes'.")
    return render_bar(value, max_stars, units_per_star, label=str(party))


def render_poll(
    poll: Poll,
    by: By,
    max_stars: int = MAX_STARS_FOR_VISUALIZATION,
    units_per_star: float | None = None,
) -> str:
    """
    Poll name on the first line, then one bar per party in the order the parties were added.
    """
    if units_per_star is None:
        if by != "votes":
            raise ValueError("Seats per star must be given for a visualization by seats.")
        units_per_star = PollList.votes_per_star()

    lines = [poll.name]
    lines.extend(render_party(party, by, max_stars, units_per_star) for party in poll.parties)
    return "\n".join(lines) + "\n"


def render_poll_list(poll_list: PollList, by: By) -> str:
    """
    All polls of the list, drawn on the same scale.
    """
    if by == "seats":
        units_per_star = poll_list.seats_per_star()
    else:
        units_per_star = poll_list.votes_per_star()

    return "".join(
        render_poll(poll, by, MAX_STARS_FOR_VISUALIZATION, units_per_star) + "\n"
        for poll in poll_list.polls
    )


def aggregate(poll_list: PollList, party_names: list[str]) -> Poll:
    return poll_list.aggregate(party_names)
