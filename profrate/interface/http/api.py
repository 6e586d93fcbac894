"""HTTP API for the professor catalog and reviews.

Why: Konsumierbare API ohne Business-Logik; pure Delegation.
"""

from typing import Any

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from profrate.application.dto.professor_dto import CreateProfessorRequest, UpdateProfessorRequest
from profrate.application.dto.review_dto import AddReviewRequest
from profrate.domain.errors import DomainError, NotFoundError, StoreError, ValidationError
from profrate.domain.models import Professor, ProfessorSummary, Review
from profrate.domain.types import Result


# Pydantic models for request/response validation
class ReviewModel(BaseModel):
    id: str
    user_id: str
    professor_id: str
    username: str
    comment: str
    rating: int


class ProfessorSummaryModel(BaseModel):
    id: str
    name: str
    department: str
    introduction: str
    picture: str
    overall_rating: float | None = None


class ProfessorModel(ProfessorSummaryModel):
    reviews: list[ReviewModel] = Field(default_factory=list)
    courses: list[str] = Field(default_factory=list)


class CreateProfessorModel(BaseModel):
    """Request model for POST /professors."""

    name: str
    department: str
    introduction: str
    picture: str


class UpdateProfessorModel(BaseModel):
    """Request model for PATCH /professors/{id}; omitted fields stay unchanged."""

    name: str | None = None
    department: str | None = None
    introduction: str | None = None
    picture: str | None = None


class AddReviewModel(BaseModel):
    """Request model for POST /professors/{id}/reviews."""

    user_id: str
    comment: str
    # passed through uncoerced; the use case accepts only integers 1..5
    rating: Any = Field(description="Integer star rating, 1..5")


class DeletionModel(BaseModel):
    id: str
    deleted: bool


# Global state (initialized on startup)
app = FastAPI(title="profrate API", version="1.0.0")
container: Any | None = None


@app.on_event("startup")
async def startup_event():
    """Initialize dependencies on startup with DI container."""
    global container

    from profrate.config.compose import build_container
    from profrate.infrastructure.logging.structlog_setup import configure_logging

    container = build_container()
    configure_logging(container.settings.log_level, container.settings.log_json)


@app.on_event("shutdown")
async def shutdown_event():
    if container is not None:
        await container.aclose()


def _container() -> Any:
    if container is None:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return container


def _unwrap(result: Result[Any, DomainError]) -> Any:
    """Map domain errors to HTTP status codes."""
    if result.ok:
        return result.value
    err = result.error
    if isinstance(err, ValidationError):
        raise HTTPException(status_code=400, detail=str(err))
    if isinstance(err, NotFoundError):
        raise HTTPException(status_code=404, detail=str(err))
    if isinstance(err, StoreError):
        raise HTTPException(status_code=503, detail=str(err))
    raise HTTPException(status_code=500, detail=str(err))


def _review_model(r: Review) -> ReviewModel:
    return ReviewModel(
        id=r.id,
        user_id=r.user_id,
        professor_id=r.professor_id,
        username=r.username,
        comment=r.comment,
        rating=r.rating,
    )


def _summary_model(p: ProfessorSummary) -> ProfessorSummaryModel:
    return ProfessorSummaryModel(
        id=p.id,
        name=p.name,
        department=p.department,
        introduction=p.introduction,
        picture=p.picture,
        overall_rating=p.overall_rating,
    )


def _professor_model(p: Professor) -> ProfessorModel:
    return ProfessorModel(
        id=p.id,
        name=p.name,
        department=p.department,
        introduction=p.introduction,
        picture=p.picture,
        overall_rating=p.overall_rating,
        reviews=[_review_model(r) for r in p.reviews],
        courses=list(p.courses),
    )


@app.get("/professors", response_model=list[ProfessorSummaryModel])
async def list_professors() -> list[ProfessorSummaryModel]:
    catalog = _container().get_professor_catalog()
    return [_summary_model(p) for p in _unwrap(await catalog.list_professors())]


@app.get("/professors/top", response_model=list[ProfessorSummaryModel])
async def top_professors(limit: int | None = Query(default=None)) -> list[ProfessorSummaryModel]:
    """Highest rated first; unrated professors last."""
    catalog = _container().get_professor_catalog()
    return [_summary_model(p) for p in _unwrap(await catalog.top_professors(limit))]


@app.get("/professors/{professor_id}", response_model=ProfessorModel)
async def get_professor(professor_id: str) -> ProfessorModel:
    catalog = _container().get_professor_catalog()
    return _professor_model(_unwrap(await catalog.get_professor(professor_id)))


@app.post("/professors", response_model=ProfessorModel, status_code=201)
async def create_professor(req: CreateProfessorModel) -> ProfessorModel:
    catalog = _container().get_professor_catalog()
    dto = CreateProfessorRequest(
        name=req.name,
        department=req.department,
        introduction=req.introduction,
        picture=req.picture,
    )
    return _professor_model(_unwrap(await catalog.create_professor(dto)))


@app.patch("/professors/{professor_id}", response_model=ProfessorModel)
async def update_professor(professor_id: str, req: UpdateProfessorModel) -> ProfessorModel:
    catalog = _container().get_professor_catalog()
    dto = UpdateProfessorRequest(
        name=req.name,
        department=req.department,
        introduction=req.introduction,
        picture=req.picture,
    )
    return _professor_model(_unwrap(await catalog.update_professor(professor_id, dto)))


@app.delete("/professors/{professor_id}", response_model=DeletionModel)
async def remove_professor(professor_id: str) -> DeletionModel:
    catalog = _container().get_professor_catalog()
    receipt = _unwrap(await catalog.remove_professor(professor_id))
    return DeletionModel(id=receipt.id, deleted=receipt.deleted)


@app.post("/professors/{professor_id}/reviews", response_model=ReviewModel, status_code=201)
async def add_review(professor_id: str, req: AddReviewModel) -> ReviewModel:
    """Add a review and refresh the professor's overall rating.

    Example:
        POST /professors/624724af974aef308ff7cc6a/reviews
        {"user_id": "62215a7ebd69a460a6193418", "comment": "Clear lectures", "rating": 5}
    """
    reviews = _container().get_review_coordinator()
    dto = AddReviewRequest(
        user_id=req.user_id,
        professor_id=professor_id,
        comment=req.comment,
        rating=req.rating,
    )
    return _review_model(_unwrap(await reviews.add_review(dto)))


@app.delete("/reviews/{review_id}", response_model=DeletionModel)
async def remove_review(review_id: str) -> DeletionModel:
    reviews = _container().get_review_coordinator()
    receipt = _unwrap(await reviews.remove_review(review_id))
    return DeletionModel(id=receipt.id, deleted=receipt.deleted)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": "profrate"}
