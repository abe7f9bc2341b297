from fastapi import APIRouter, Depends, HTTPException, Request

from gemini.errors import AggregateGenerationError
from gemini.fallback import ReviewService
from models.review import ModelsResponse, ReviewRequest, ReviewResponse

router = APIRouter(prefix="/ai", tags=["review"])


def get_review_service(request: Request) -> ReviewService:
    return request.app.state.review_service


# ---------- Endpoints ----------

@router.post("/get-review", response_model=ReviewResponse)
async def get_review(body: ReviewRequest, service: ReviewService = Depends(get_review_service)):
    """
    Sends the submitted code to Gemini and returns the Markdown review.
    Models are tried in preference order; a total failure maps to 502.
    """
    if not body.code.strip():
        raise HTTPException(status_code=400, detail="Code is required")

    try:
        result = await service.review(body.code)
    except AggregateGenerationError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return ReviewResponse(review=result.text, model=result.model)


@router.get("/models", response_model=ModelsResponse)
async def list_models(service: ReviewService = Depends(get_review_service)):
    """Returns the resolved model preference list, highest priority first."""
    return ModelsResponse(models=list(service.models))
