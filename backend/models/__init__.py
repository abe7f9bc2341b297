from models.review import ModelsResponse, ReviewRequest, ReviewResponse

__all__ = ["ModelsResponse", "ReviewRequest", "ReviewResponse"]
