# Services package init
"""
Notes App Backend — Services Layer
====================================

What:  Logic shared by the JSON API and the HTML pages.

Service Inventory:
    - NoteStore:   read-all / write-all over the JSON file, serialized transactions
    - NoteService: list, get, create, shallow-merge update, delete
    - BodyParser:  one body decoder, configured for form or JSON bodies
"""
