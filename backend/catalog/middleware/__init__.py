# Middleware package init
"""
Catalog Backend — Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → Route Handler

    1. Request ID: assign the correlation ID used by every log line
    2. Logging: log method, path, status and duration with that ID
    3. GZip: compress larger HTML pages (FastAPI's GZipMiddleware)
"""
