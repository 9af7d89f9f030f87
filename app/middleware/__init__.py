# Middleware package init
"""
Snippet Summarizer Backend — Middleware Package
================================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first, so every later log line can carry it
    2. Logging captures the final status and total duration
    3. GZip / CORS are FastAPI's built-ins
"""
