from typing import Any, Optional, Tuple

from pydantic import BaseModel

from enigma_trace.signal_path import CharacterOutcome, PathDirection


class ProcessRequest(BaseModel):
    config: Optional[dict[str, Any]] = None
    text: str


class ProcessResponse(BaseModel):
    output: str


class PathEntry(BaseModel):
    component: str
    input_letter: str
    output_letter: str
    direction: PathDirection


class Step(BaseModel):
    input_letter: str
    output_letter: str
    positions_before: Tuple[str, str, str]
    positions_after: Tuple[str, str, str]
    path: list[PathEntry]

    @classmethod
    def from_outcome(cls, outcome: CharacterOutcome) -> "Step":
        return cls(
            input_letter=outcome.input_letter,
            output_letter=outcome.output_letter,
            positions_before=outcome.positions_before,
            positions_after=outcome.positions_after,
            path=[
                PathEntry(
                    component=entry.component,
                    input_letter=entry.input_letter,
                    output_letter=entry.output_letter,
                    direction=entry.direction,
                )
                for entry in outcome.path
            ],
        )


class DetailedResponse(BaseModel):
    output: str
    steps: list[Step]


class CatalogResponse(BaseModel):
    rotors: list[str]
    reflectors: list[str]
