"""
Health Check Service

Reports record store connectivity, basic system metrics and the
configuration the portal was started with.
"""

import os
import time
import psutil
from datetime import datetime, timezone
from typing import Dict, Any
from opentelemetry import trace

tracer = trace.get_tracer(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class HealthCheckService:
    """Service for system health monitoring."""

    def __init__(self, store, service_version: str = "1.0.0", environment: str = "development"):
        self.store = store
        self.service_version = service_version
        self.environment = environment

    def get_comprehensive_health(self) -> Dict[str, Any]:
        """Get health status including the record store and system metrics."""
        with tracer.start_as_current_span("health.comprehensive_check") as span:
            start_time = time.time()

            mongodb_health = self._check_mongodb_health()
            system_metrics = self._get_system_metrics()
            overall_status = "healthy" if mongodb_health["status"] == "healthy" else "unhealthy"

            response_time_ms = round((time.time() - start_time) * 1000, 2)

            health_data = {
                "status": overall_status,
                "service": "safety-ops-api",
                "version": self.service_version,
                "environment": self.environment,
                "timestamp": _now(),
                "response_time_ms": response_time_ms,
                "dependencies": {
                    "mongodb": mongodb_health
                },
                "system_metrics": system_metrics,
                "configuration": self._get_configuration_status()
            }

            span.set_attributes({
                "health.overall_status": overall_status,
                "health.response_time_ms": response_time_ms,
                "health.mongodb_status": mongodb_health["status"]
            })

            return health_data

    def _check_mongodb_health(self) -> Dict[str, Any]:
        """Check MongoDB connectivity and response time."""
        with tracer.start_as_current_span("health.mongodb_check") as span:
            start_time = time.time()
            health_info = dict(self.store.health_check())
            health_info["response_time_ms"] = round((time.time() - start_time) * 1000, 2)
            health_info["last_check"] = _now()

            span.set_attribute("mongodb.status", health_info.get("status", "unknown"))
            return health_info

    def _get_system_metrics(self) -> Dict[str, Any]:
        """Get basic system performance metrics."""
        try:
            cpu_percent = psutil.cpu_percent(interval=0.1)

            memory = psutil.virtual_memory()
            disk = psutil.disk_usage('/')

            return {
                "cpu_percent": cpu_percent,
                "memory": {
                    "used_mb": round(memory.used / 1024 / 1024, 2),
                    "total_mb": round(memory.total / 1024 / 1024, 2),
                    "percent": memory.percent
                },
                "disk": {
                    "used_gb": round(disk.used / 1024 / 1024 / 1024, 2),
                    "total_gb": round(disk.total / 1024 / 1024 / 1024, 2),
                    "percent": round((disk.used / disk.total) * 100, 2)
                },
                "load_average": list(os.getloadavg()) if hasattr(os, 'getloadavg') else None
            }
        except Exception as e:
            return {
                "error": f"Failed to collect system metrics: {str(e)}"
            }

    def _get_configuration_status(self) -> Dict[str, Any]:
        return {
            "mongodb_uri_configured": bool(os.getenv('MONGODB_URI')),
            "admin_pin_configured": bool(os.getenv('ADMIN_PIN')),
            "otel_enabled": os.getenv('OTEL_ENABLED', 'true').lower() == 'true',
            "environment": self.environment
        }
