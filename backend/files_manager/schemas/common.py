"""Shared Pydantic schemas."""
from pydantic import BaseModel


class StatusResponse(BaseModel):
    db: bool
    storage: bool


class StatsResponse(BaseModel):
    files: int
    jobs: int
