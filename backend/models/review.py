from pydantic import BaseModel


class ReviewRequest(BaseModel):
    code: str


class ReviewResponse(BaseModel):
    review: str     # Markdown
    model: str      # Gemini model that produced the review


class ModelsResponse(BaseModel):
    models: list[str]   # priority order, first is tried first
