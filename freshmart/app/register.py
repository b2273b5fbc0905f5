from flask import Flask

from freshmart.modules.auth.routes import bp as auth_bp
from freshmart.modules.catalog.routes import bp as catalog_bp
from freshmart.modules.dashboard.routes import bp as dashboard_bp


def register_blueprints(app: Flask) -> None:
    # storefront
    app.register_blueprint(auth_bp)
    app.register_blueprint(catalog_bp)

    # admin console
    app.register_blueprint(dashboard_bp, url_prefix="/admin")
