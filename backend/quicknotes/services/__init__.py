# Services package init
"""
QuickNotes Backend — Services Layer
=====================================

What:  Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - Summarizer (abstract): Interface for note summarization providers
    - GeminiSummarizer: Concrete implementation using Google Gemini
    - NoteService: List / create / delete with validation and error translation
"""
