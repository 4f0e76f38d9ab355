# labelscan/app.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, FastAPI, File, Query, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from labelscan.batch import rate_batch
from labelscan.config import Settings, configure_logging
from labelscan.errors import GenerationEngineError, InputValidationError, NoTextFoundError
from labelscan.models import ImageInput
from labelscan.pipeline import Services, analyze, build_services
from labelscan.rating import analyze_rating
from labelscan.recipes import generate_recipes, recipe_details

logger = logging.getLogger(__name__)


# ─── Request bodies ────────────────────────────────────────────────────────────
# Loose item types on purpose: per-field checks happen in the pipeline so a bad
# value becomes a 400 with a message (or a per-item batch error), not a 422.

class RatingRequest(BaseModel):
    ingredients: Any = None
    productName: Any = None


class BatchRatingRequest(BaseModel):
    products: Any = None


class RecipeRequest(BaseModel):
    ingredients: Any = None
    customIngredients: Any = None


class RecipeDetailsRequest(BaseModel):
    recipeName: Any = None
    ingredients: Any = None


def get_services(request: Request) -> Services:
    return request.app.state.services


# ─── Routes ────────────────────────────────────────────────────────────────────
analyze_router = APIRouter(prefix="/api/analyze", tags=["analyze"])
rating_router = APIRouter(prefix="/api/rating", tags=["rating"])
recipe_router = APIRouter(prefix="/api/recipe", tags=["recipe"])


@analyze_router.post("")
def analyze_images(
    images: Optional[List[UploadFile]] = File(None),
    rate: bool = Query(False, description="Also run the health rating when ingredients are found"),
    services: Services = Depends(get_services),
):
    inputs = [
        ImageInput(data=f.file.read(), mime_type=f.content_type or "application/octet-stream", index=i)
        for i, f in enumerate(images or [])
    ]
    settings = services.settings
    report = analyze(
        inputs, services.recognizer, services.generator,
        max_images=settings.max_images,
        max_image_bytes=settings.max_image_bytes,
        include_rating=rate,
    )
    return report.to_dict()


@rating_router.post("/analyze")
def rating_analyze(body: RatingRequest, services: Services = Depends(get_services)):
    return analyze_rating(body.ingredients, services.generator, body.productName)


@rating_router.post("/batch")
def rating_batch(body: BatchRatingRequest, services: Services = Depends(get_services)):
    report = rate_batch(body.products, services.generator, max_workers=services.settings.batch_workers)
    return report.to_dict()


@recipe_router.post("/generate")
def recipe_generate(body: RecipeRequest, services: Services = Depends(get_services)):
    return generate_recipes(body.ingredients, services.generator, body.customIngredients)


@recipe_router.post("/details")
def recipe_get_details(body: RecipeDetailsRequest, services: Services = Depends(get_services)):
    return recipe_details(body.recipeName, services.generator, body.ingredients)


# ─── App factory ───────────────────────────────────────────────────────────────
def create_app(services: Optional[Services] = None, settings: Optional[Settings] = None) -> FastAPI:
    if services is None:
        services = build_services(settings or Settings.from_env())
    settings = services.settings
    configure_logging(settings.log_level)

    app = FastAPI(title="Label Scan", version="0.1.0")
    app.state.services = services
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_credentials="*" not in settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(InputValidationError)
    async def _invalid_input(request: Request, exc: InputValidationError):
        return JSONResponse(status_code=400, content=exc.to_dict())

    @app.exception_handler(NoTextFoundError)
    async def _no_text(request: Request, exc: NoTextFoundError):
        logger.warning("No text found in %d image(s)", len(exc.outcomes))
        return JSONResponse(status_code=400, content=exc.to_dict())

    @app.exception_handler(GenerationEngineError)
    async def _engine_failed(request: Request, exc: GenerationEngineError):
        logger.error("%s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Generation engine failure", "details": str(exc)},
        )

    @app.get("/health")
    def health():
        return {
            "status": "ok",
            "message": "Backend server is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    app.include_router(analyze_router)
    app.include_router(rating_router)
    app.include_router(recipe_router)
    return app
