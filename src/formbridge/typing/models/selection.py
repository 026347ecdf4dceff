"""Button branch selection states."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from formbridge.typing.models.component import ButtonOption


class NoSelection(BaseModel):
    """The selector has no value: no branch applies."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class UnmatchedSelection(BaseModel):
    """The selector names an option that does not exist."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    selector: str


class MatchedBranch(BaseModel):
    """The selector matches exactly one button option."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    selector: str
    index: int
    option: ButtonOption


BranchSelection = NoSelection | UnmatchedSelection | MatchedBranch
