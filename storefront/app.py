# module storefront.app
from storefront.app_setup import create_app

# App globale
app = create_app()
