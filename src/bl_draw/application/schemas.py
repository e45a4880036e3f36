"""Pydantic schemas for bl_draw API."""

from collections.abc import Mapping

from pydantic import BaseModel, Field

from src.bl_draw.domain.models import Draw
from src.bl_ranking.application.schemas import ReevaluationResponse


class AddDrawRequest(BaseModel):
    numbers: list[int] = Field(..., description="5 or 10 numbers in [1, 25]; repeats allowed")
    name: str | None = Field(None, max_length=120)


class DrawResponse(BaseModel):
    id: str
    numbers: list[int]
    name: str | None
    created_at: str  # ISO8601 string

    @classmethod
    def from_domain(cls, draw: Draw) -> "DrawResponse":
        return cls(
            id=draw.id,
            numbers=list(draw.numbers),
            name=draw.name,
            created_at=draw.created_at.isoformat(),
        )


class DrawListResponse(BaseModel):
    items: list[DrawResponse]
    # JSON object keys are strings: {"7": 2} means 7 was drawn twice
    pool: dict[str, int]
    pool_size: int

    @classmethod
    def build(cls, draws: list[Draw], pool: Mapping[int, int]) -> "DrawListResponse":
        return cls(
            items=[DrawResponse.from_domain(d) for d in draws],
            pool={str(n): c for n, c in sorted(pool.items())},
            pool_size=sum(pool.values()),
        )


class DrawMutationResponse(BaseModel):
    draw: DrawResponse | None
    reevaluation: ReevaluationResponse
