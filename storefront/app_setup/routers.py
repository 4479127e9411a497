"""
Registre central des routers (API v1, health).
- API v1: catalog, cart, delivery, checkout, payments
- Health: health_router
"""
from fastapi import FastAPI

from storefront.cart import views as cart_views
from storefront.catalog import views as catalog_views
from storefront.checkout import views as checkout_views
from storefront.delivery import views as delivery_views
from storefront.health.router import router as health_router
from storefront.payments import views as payments_views


def register_routers(app: FastAPI) -> None:
    """
    Agrège tous les routers de l'application.
    - L'ordre n'a pas d'impact sauf conflits de chemins (évités par préfixes).
    """
    # API v1
    app.include_router(catalog_views.router)
    app.include_router(cart_views.router)
    app.include_router(delivery_views.router)
    app.include_router(checkout_views.router)
    app.include_router(payments_views.router)
    # Health & monitoring
    app.include_router(health_router)
