# Routes package init
"""
Notes App Backend — Routes Package
====================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - api.py:     /api/notes…           (JSON CRUD)
    - web.py:     /, /notes/…           (server-rendered HTML CRUD)
    - health.py:  GET /health           (service health check)

Routes stay thin: decode the request, call NoteService, shape the response.
The JSON router is mounted before the HTML router, and anything neither
matches falls through to the catch-all 404 page registered in main.py.
"""
