"""
Parcel Server — Middleware Package
===================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first, so the access log line carries the correlation id
    2. Logging measures everything below it, handlers included
"""
