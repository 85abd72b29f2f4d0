# Middleware package init
"""
HRMS Backend — Middleware Package
===================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

The request ID is set before the logging middleware runs, so every access
line and error envelope carries it.
"""
