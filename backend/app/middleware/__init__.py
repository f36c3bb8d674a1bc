# Middleware package init
"""
PanelProxy Backend - Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [CORS headers] → [Logging] → Route Handler

    1. Request ID first: every later log line can carry it
    2. CORS headers: stamped on whatever response comes back, 404s included
    3. Logging: sees the final status and duration of the route
"""
