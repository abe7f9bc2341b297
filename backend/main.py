from dotenv import load_dotenv
load_dotenv()

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gemini.config import load_settings
from gemini.fallback import ReviewService
from routes import review

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

DEFAULT_ORIGINS = ["http://localhost:5173", "http://127.0.0.1:5173"]


def _cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or DEFAULT_ORIGINS


def create_app(service: Optional[ReviewService] = None) -> FastAPI:
    """
    Build the API. Without an injected service, settings are read from the
    environment at startup and a missing API key aborts the boot.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        review_service = service
        if review_service is None:
            review_service = ReviewService.from_settings(load_settings())
        logger.info("Gemini model preference: %s", ", ".join(review_service.models))
        app.state.review_service = review_service
        yield

    app = FastAPI(title="Code Review API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(review.router)

    @app.get("/")
    def health():
        return {"status": "ok", "service": "code-review"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", "3000")))
