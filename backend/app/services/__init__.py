# Services package init
"""
PanelProxy Backend - Services Layer
====================================

Service Inventory:
    - license_service:  Bearer token extraction and whitelist check
    - proxy_pipeline:   ProxyHandler, the gate sequence shared by both endpoints
    - ai_command:       aiCommand handler (prompt building + Gemini)
    - youtube_search:   youtubeSearch handler (query + YouTube)
    - llm_base:         LLMService interface
    - gemini_service:   Google Gemini implementation of LLMService
    - youtube_service:  YouTube Data API v3 search client and item mapping
"""
