# app/schemas/social.py

from pydantic import BaseModel, HttpUrl
from typing import List


class ShareRequest(BaseModel):
    link: HttpUrl


class TweetOut(BaseModel):
    tweet: str


class ThreadOut(BaseModel):
    thread: List[str]
