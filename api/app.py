"""
Safety Operations Portal API - Flask Application Entry Point

This module builds the Flask application with OpenAPI 3.0 support, wires the
record store into the portal services and registers the route blueprints.
"""

import os
from datetime import datetime, timezone
from flask import jsonify
from flask_openapi3 import OpenAPI, Info, Tag
from observability.config import setup_observability
from observability.middleware import add_observability_middleware

from domain.seed import SEED_TEAMS, SEED_NOTICES
from middleware.error_handler import ErrorHandlerMiddleware, make_validation_error_callback
from services.hal import create_hal_formatter
from services.health import HealthCheckService
from services.mongodb import MongoDBService
from services.teams import TeamService
from services.notices import NoticeService
from services.vehicles import VehicleService
from services.inspections import InspectionService
from services.settings import SettingsService

# OpenAPI info
info = Info(
    title="Safety Operations Portal API",
    version="1.0.0",
    description="Team safety scores, notice board, fleet and inspection records"
)

health_tag = Tag(name="Health", description="System health and status")


def load_config() -> dict:
    """Read configuration from the environment."""
    environment = os.getenv('ENVIRONMENT', 'development')
    return {
        'ENVIRONMENT': environment,
        'DEBUG': environment == 'development',
        'MONGODB_URI': os.getenv('MONGODB_URI', 'mongodb://localhost:27017/safety_portal_dev'),
        'MONGODB_DATABASE': os.getenv('MONGODB_DATABASE', 'safety_portal_dev'),
        'BASE_URL': os.getenv('BASE_URL', 'http://localhost:5000'),
        'ADMIN_PIN': os.getenv('ADMIN_PIN', '2026'),
        'DEFAULT_TEAM_YEAR': int(os.getenv('DEFAULT_TEAM_YEAR', '2025')),
        'SEED_ON_STARTUP': os.getenv('SEED_ON_STARTUP', 'false').lower() == 'true',
        'OTEL_ENABLED': os.getenv('OTEL_ENABLED', 'true').lower() == 'true',
        'SERVICE_VERSION': os.getenv('SERVICE_VERSION', '1.0.0'),
        'OTEL_EXPORTER_OTLP_ENDPOINT': os.getenv('OTEL_EXPORTER_OTLP_ENDPOINT'),
        'MONGODB_MAX_POOL_SIZE': int(os.getenv('MONGODB_MAX_POOL_SIZE', '10')),
        'MONGODB_MIN_POOL_SIZE': int(os.getenv('MONGODB_MIN_POOL_SIZE', '1')),
        'MONGODB_SERVER_SELECTION_TIMEOUT_MS': int(os.getenv('MONGODB_SERVER_SELECTION_TIMEOUT_MS', '5000')),
        'PORT': int(os.getenv('PORT', '5000')),
    }


def create_app(config: dict = None, record_store=None) -> OpenAPI:
    """
    Build the Flask application.

    Args:
        config: Overrides applied on top of the environment configuration
        record_store: Record store to use instead of MongoDB (tests)

    Returns:
        Configured OpenAPI application
    """
    settings = load_config()
    settings.update(config or {})

    setup_observability(settings)

    hal_formatter = create_hal_formatter(settings['BASE_URL'])

    app = OpenAPI(
        __name__,
        info=info,
        validation_error_status=400,
        validation_error_callback=make_validation_error_callback(hal_formatter)
    )
    app.config.update(settings)

    add_observability_middleware(app, instrument=app.config['OTEL_ENABLED'])

    store = record_store or MongoDBService(
        app.config['MONGODB_URI'],
        app.config['MONGODB_DATABASE'],
        max_pool_size=app.config['MONGODB_MAX_POOL_SIZE'],
        min_pool_size=app.config['MONGODB_MIN_POOL_SIZE'],
        server_selection_timeout_ms=app.config['MONGODB_SERVER_SELECTION_TIMEOUT_MS']
    )

    # Make services available to routes
    app.mongodb_service = store
    app.hal_formatter = hal_formatter
    app.team_service = TeamService(store, default_year=app.config['DEFAULT_TEAM_YEAR'])
    app.notice_service = NoticeService(store)
    app.vehicle_service = VehicleService(store)
    app.inspection_service = InspectionService(store)
    app.settings_service = SettingsService(store, admin_pin=str(app.config['ADMIN_PIN']))
    app.health_service = HealthCheckService(
        store,
        service_version=app.config['SERVICE_VERSION'],
        environment=app.config['ENVIRONMENT']
    )
    app.error_handler = ErrorHandlerMiddleware(app, hal_formatter)

    # Register routes
    from routes.teams import teams_bp
    from routes.notices import notices_bp
    from routes.settings import settings_bp
    from routes.vehicles import vehicles_bp
    from routes.inspections import inspections_bp

    app.register_api(teams_bp)
    app.register_api(notices_bp)
    app.register_api(settings_bp)
    app.register_api(vehicles_bp)
    app.register_api(inspections_bp)

    @app.get('/api/healthz', tags=[health_tag])
    def health_check():
        """Health check with record store status and system metrics."""
        try:
            health_data = app.health_service.get_comprehensive_health()
        except Exception as e:
            app.logger.error(f"Health check service failed: {e}")
            health_data = {
                "status": "unhealthy",
                "service": "safety-ops-api",
                "version": app.config['SERVICE_VERSION'],
                "environment": app.config['ENVIRONMENT'],
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "error": f"Health check service failed: {str(e)}"
            }

        status_code = 200 if health_data["status"] == "healthy" else 503
        health_data['_links'] = {
            'self': hal_formatter.builder.link_builder.build_self_link('/api/healthz').model_dump(exclude_none=True)
        }
        return jsonify(health_data), status_code

    if app.config['SEED_ON_STARTUP']:
        app.team_service.seed_teams(SEED_TEAMS)
        app.notice_service.seed_notices(SEED_NOTICES)

    return app


app = create_app()


if __name__ == '__main__':
    # Development server
    app.run(
        host='0.0.0.0',
        port=app.config['PORT'],
        debug=app.config['DEBUG']
    )
