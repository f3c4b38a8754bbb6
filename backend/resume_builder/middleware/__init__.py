"""
Middleware Package

Contains FastAPI middleware for:
- Prometheus metrics collection
- Resume write and export instrumentation
"""

from resume_builder.middleware.metrics import (
    PrometheusMiddleware,
    setup_metrics,
    record_resume_write,
    record_inline_entity,
    record_pdf_export_latency,
)

__all__ = [
    "PrometheusMiddleware",
    "setup_metrics",
    "record_resume_write",
    "record_inline_entity",
    "record_pdf_export_latency",
]
