from pydantic import BaseModel, Field, StrictInt, model_validator
from typing import Dict, List, Optional


class StartGameModel(BaseModel):
    message: str
    deck: List[str]  # pop order, first element is drawn first


class DrawCardModel(BaseModel):
    message: str
    card: str


class SaveGameRequestModel(BaseModel):
    username: Optional[str] = Field(default=None, min_length=1)
    score: Optional[StrictInt] = None  # booleans and floats are rejected

    @model_validator(mode="after")
    def check_username_and_score(self):
        if (self.username is None) != (self.score is None):
            raise ValueError("username and score must be supplied together")
        return self

    @property
    def has_score(self) -> bool:
        return self.username is not None and self.score is not None


class MessageModel(BaseModel):
    message: str


class ErrorModel(BaseModel):
    error: str


LeaderboardModel = Dict[str, int]
