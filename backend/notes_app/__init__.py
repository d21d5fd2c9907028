"""
Notes App Backend — Application Package Initializer
===================================================

What: Marks the `notes_app` directory as a Python package.
Who:  Used by uvicorn (`notes_app.main:app`), the `notes-app` console script and pytest.

Architecture Note:
    A thin layered layout around one flat JSON file:

    ┌─────────────────────────────────────┐
    │   Routes (JSON API + HTML pages)    │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Views (HTML string rendering)     │  ← pure functions, no I/O
    ├─────────────────────────────────────┤
    │   Services (note logic, parsing)    │  ← shared by both surfaces
    ├─────────────────────────────────────┤
    │   NoteStore (JSON file)             │  ← read-all / write-all
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
