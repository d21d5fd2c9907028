# Middleware package init
"""
Notes App Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → Route Handler

    Request ID runs first so the access log line of the Logging middleware
    and the error handlers can both pick the id up from request_id_var.
"""
