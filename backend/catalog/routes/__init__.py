# Routes package init
"""
Catalog Backend — Routes Package
==================================

What:  HTTP route handlers that accept requests and return pages or redirects.

Route Inventory:
    - genres.py:  GET  /genres                 (list)
                  GET  /genre/create           (create form)
                  POST /genre/create           (validate + create)
                  GET  /genre/{id}             (detail)
                  GET  /genre/{id}/delete      (blocking page or delete)
                  POST /genre/delete           (blocking page or delete)
    - health.py:  GET  /health                 (service health check)

Design Principle:
    Routes stay THIN: read the request, call the service, render a
    template or redirect. Lookups and checks belong in services.
"""
