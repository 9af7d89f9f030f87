# Services package init
"""
Snippet Summarizer Backend — Services Layer
============================================

Service Inventory:
    - LLMService (abstract): Interface for AI summarization providers
    - GeminiService: Concrete implementation using the Google Gemini API
    - SnippetStore: Persistence adapter over the snippets table
    - SnippetService: Orchestrates validate → summarize → persist, and
      classifies failures into the application's error kinds
"""
