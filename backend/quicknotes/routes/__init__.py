# Routes package init
"""
QuickNotes Backend — API Routes Package
=========================================

Route Inventory:
    - notes.py:   GET    /api/notes              (list, newest first)
                  POST   /api/notes              (create)
                  DELETE /api/notes/{id}         (delete)
                  POST   /api/notes/summarize    (Gemini summary of free text)
    - health.py:  GET    /health                 (service health check)

Routes handle HTTP concerns only; rules and store access live in services.
"""
