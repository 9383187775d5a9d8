# Middleware package init
"""
Portfolio API - Middleware Package
==================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: correlation ID for logs, error bodies and the response header
    2. Logging: one access log line per request with status and duration
    3. CORS: FastAPI's CORSMiddleware (handles preflight)
"""
