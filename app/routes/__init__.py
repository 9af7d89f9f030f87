# Routes package init
"""
Snippet Summarizer Backend — API Routes Package
================================================

Route Inventory:
    - snippets.py:  POST /snippets           (summarize and store text)
                    GET  /snippets           (list all snippets)
                    GET  /snippets/{id}      (get one snippet)
    - health.py:    GET  /health             (liveness check)

Anything else is answered with 404 {"error": "Not found"} by the handlers
in main.py.

Design Principle:
    Routes are THIN: parse the request, call SnippetService, return the
    schema. Business logic and error classification live in the service.
"""
