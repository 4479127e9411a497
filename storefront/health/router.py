from fastapi import APIRouter, Request

from storefront.catalog.repository import catalog_currency
from storefront.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
def health_root():
    return {"ok": True}


@router.get("/details")
def health_details(request: Request):
    catalog = getattr(request.app.state, "catalog", None)
    return {
        "ok": catalog is not None,
        "catalog": {
            "loaded": catalog is not None,
            "products": len(catalog or {}),
            "currency": catalog_currency(catalog or {}),
        },
        "rate_limit": rate_limit_health_info(request),
    }
