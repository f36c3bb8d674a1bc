# Routes package init
"""
PanelProxy Backend - API Routes Package
========================================

Route Inventory:
    - proxy.py:   POST /api/aiCommand       (Gemini text generation)
                  POST /api/youtubeSearch   (YouTube video search)
    - health.py:  GET  /health              (liveness probe)

Routes stay thin: the proxy handlers in app.services own validation,
licensing, forwarding and response shaping.
"""
