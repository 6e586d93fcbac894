from dataclasses import dataclass


@dataclass
class CreateProfessorRequest:
    name: str
    department: str
    introduction: str
    picture: str


@dataclass
class UpdateProfessorRequest:
    """Partial update; None means leave the field as is."""

    name: str | None = None
    department: str | None = None
    introduction: str | None = None
    picture: str | None = None
