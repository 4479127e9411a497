"""
Gestionnaires d'exceptions utilisés par la factory.
- StorefrontError: erreurs métier du panier/checkout -> JSON {error, message, details}.
- RequestValidationError: corps/paramètres invalides -> 422 {error: "InvalidRequest", details}.
- HTTPException: même enveloppe {error} pour les clients programmatiques.
"""
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.errors import StorefrontError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Enregistre les handlers JSON.
    - Les erreurs de checkout ne sont jamais relancées ni remplacées par une valeur par défaut:
      le client reçoit le code stable et corrige sa saisie.
    """
    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        logger.info(f"{request.method} {request.url.path} -> {exc.code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content=jsonable_encoder({
                "error": "InvalidRequest",
                "message": "Invalid request payload",
                "details": exc.errors(),
            }),
        )

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )
