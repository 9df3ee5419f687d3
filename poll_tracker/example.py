import logging

from poll_tracker.factory import PollGenerator
from poll_tracker.model import Party, Poll, PollList
from poll_tracker.visualization import render_poll, render_poll_list


def get_example_poll_list():
    poll_list = PollList(num_polls=3, num_seats=338)

    poll_list.add_poll(Poll.from_parties("Leger", [
        Party("CPC", 130, 0.34, colour="#1a4782"),
        Party("LPC", 150, 0.36, colour="#d71920"),
        Party("NDP", 25, 0.15, colour="#f37021"),
        Party("BQ", 30, 0.07, colour="#33b2cc"),
        Party("Green", 3, 0.08, colour="#3d9b35"),
    ]))
    poll_list.add_poll(Poll.from_parties("Abacus", [
        Party("CPC", 165, 0.39),
        Party("LPC", 120, 0.33),
        Party("NDP", 20, 0.14),
        Party("BQ", 33, 0.08),
        Party("Green", 0, 0.06),
    ]))
    poll_list.add_poll(Poll.from_parties("Nanos", [
        Party("CPC", 141, 0.36),
        Party("LPC", 147, 0.35),
        Party("NDP", 19, 0.16),
        Party("BQ", 31, 0.08),
    ]))

    return poll_list


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(message)s")

    poll_list = get_example_poll_list()
    party_names = ["CPC", "LPC", "NDP", "BQ", "Green"]

    print(poll_list)
    print(render_poll_list(poll_list, "votes"))
    print(render_poll(poll_list.aggregate(party_names), "seats", units_per_star=poll_list.seats_per_star()))

    generator = PollGenerator(338, party_names, randomseed=2019)
    print(render_poll_list(generator.generate_poll_list(2), "seats"))
