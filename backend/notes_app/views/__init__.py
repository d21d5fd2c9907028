"""
Notes App Backend — HTML Views
================================

What:  Pure functions that turn notes into HTML strings.
How:   pages.py builds fragments (list, detail, form) and wraps them in a
       shared page shell. No I/O, no template engine.
Who:   Used by routes/web.py and by the HTML error handlers in main.py.
"""
