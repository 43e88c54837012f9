# Middleware package init
"""
Quillnote Backend - Middleware Package
========================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line and every service log
    line of the request share one correlation ID.
"""
