# main.py
from __future__ import annotations

from typing import List, Literal, Optional, Dict

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field, constr

from poll_tracker import model as poll_model
from poll_tracker.factory import PollGenerator
from poll_tracker.visualization import aggregate, render_poll, render_poll_list


# --------- Models ----------
class Party(BaseModel):
    name: constr(strip_whitespace=True, min_length=1)
    color: Optional[str] = None


class ElectionSettings(BaseModel):
    seats: int = Field(338, ge=1)
    num_polls: int = Field(3, ge=1)


class PartyProjectionIn(BaseModel):
    name: constr(strip_whitespace=True, min_length=1)
    seats: float = Field(..., ge=0)
    votes: float = Field(..., ge=0, le=1, description="Vote share as a decimal")


class PollIn(BaseModel):
    name: constr(strip_whitespace=True, min_length=1)
    parties: List[PartyProjectionIn] = Field(..., min_length=1)


class PartyProjection(BaseModel):
    name: str
    seats: float
    votes: float


class PollOut(BaseModel):
    name: str
    parties: List[PartyProjection]


class GenerateRequest(BaseModel):
    seed: Optional[int] = None


# --------- App ----------
app = FastAPI(title="Poll Tracker API", version="0.1.0")

# CORS (useful when calling the API from a page served on a different origin)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # tighten if needed
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --------- In-memory stores ----------
SETTINGS = ElectionSettings()
PARTIES: Dict[str, Party] = {
    "bq": Party(name="BQ", color="#33b2cc"),
    "cpc": Party(name="CPC", color="#1a4782"),
    "green": Party(name="Green", color="#3d9b35"),
    "lpc": Party(name="LPC", color="#d71920"),
    "ndp": Party(name="NDP", color="#f37021"),
}
POLLS: poll_model.PollList = poll_model.PollList(SETTINGS.num_polls, SETTINGS.seats)


def reset_polls():
    global POLLS
    POLLS = poll_model.PollList(SETTINGS.num_polls, SETTINGS.seats)


def party_names() -> List[str]:
    return [party.name for party in PARTIES.values()]


def to_poll_out(poll: poll_model.Poll) -> PollOut:
    return PollOut(
        name=poll.name,
        parties=[PartyProjection(name=p.name, seats=p.seats, votes=p.votes) for p in poll.parties],
    )


# --------- Health ----------
@app.get("/health", tags=["meta"])
def health():
    return {"status": "ok"}


# --------- Settings ----------
@app.get("/settings", response_model=ElectionSettings, tags=["settings"])
def get_settings():
    return SETTINGS


@app.put("/settings", response_model=ElectionSettings, tags=["settings"])
def put_settings(s: ElectionSettings):
    global SETTINGS
    SETTINGS = s
    # Polls collected for a different election no longer fit.
    reset_polls()
    return SETTINGS


# --------- Parties CRUD ----------
@app.get("/parties", response_model=List[Party], tags=["parties"])
def list_parties():
    return list(PARTIES.values())


@app.post("/parties", response_model=Party, status_code=201, tags=["parties"])
def create_party(party: Party):
    key = poll_model.party_key(party.name)
    if key in PARTIES:
        raise HTTPException(status_code=409, detail="Party already exists")
    PARTIES[key] = party
    return party


@app.delete("/parties/{name}", status_code=204, tags=["parties"])
def delete_party(name: str):
    key = poll_model.party_key(name)
    if key not in PARTIES:
        raise HTTPException(status_code=404, detail="Party not found")
    del PARTIES[key]
    return


@app.delete("/parties", status_code=204, tags=["parties"])
def delete_all_parties():
    PARTIES.clear()
    return


# --------- Polls ----------
@app.get("/polls", response_model=List[PollOut], tags=["polls"])
def list_polls():
    return [to_poll_out(poll) for poll in POLLS.polls]


@app.post("/polls", response_model=PollOut, status_code=201, tags=["polls"])
def create_poll(payload: PollIn):
    unknown = [p.name for p in payload.parties if poll_model.party_key(p.name) not in PARTIES]
    if unknown:
        raise HTTPException(status_code=400, detail={"unknown_party_names": unknown})
    if POLLS.is_full:
        raise HTTPException(status_code=409, detail="Poll list is full")

    poll = poll_model.Poll(payload.name, max_parties=len(PARTIES))
    for p in payload.parties:
        party = PARTIES[poll_model.party_key(p.name)]
        poll.add_party(poll_model.Party(party.name, p.seats, p.votes, colour=party.color))
    POLLS.add_poll(poll)
    return to_poll_out(poll)


@app.post("/polls/generate", response_model=List[PollOut], tags=["polls"])
def generate_polls(req: GenerateRequest):
    global POLLS
    if not PARTIES:
        raise HTTPException(status_code=400, detail="No parties configured")

    generator = PollGenerator(SETTINGS.seats, party_names(), randomseed=req.seed)
    POLLS = generator.generate_poll_list(SETTINGS.num_polls)

    for poll in POLLS.polls:
        for party in poll.parties:
            party.colour = PARTIES[party.key].color

    return [to_poll_out(poll) for poll in POLLS.polls]


# --------- Visualization ----------
@app.get("/visualization", response_class=PlainTextResponse, tags=["visualization"])
def visualization(by: Literal["seats", "votes"] = "seats", option: Literal["all", "aggregate"] = "all"):
    if option == "all":
        return render_poll_list(POLLS, by)

    aggregate_poll = aggregate(POLLS, party_names())
    units_per_star = POLLS.seats_per_star() if by == "seats" else POLLS.votes_per_star()
    return render_poll(aggregate_poll, by, units_per_star=units_per_star)


# --------- Dev entrypoint ----------
# Run: uvicorn poll_tracker_demo_site.main:app --reload
