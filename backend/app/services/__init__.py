# Services package init
"""
Quillnote Backend - Services Layer
====================================

Service Inventory:
    - SummarizationProvider (abstract): one provider's summarize(text) -> text
    - OpenAIService: chat completions adapter (default provider)
    - GeminiService: generateContent adapter
    - AccessGate: owner-scoped note lookup (NotFound for missing or foreign notes)
    - SummaryService: provider registry + summarize workflow, collapses
      provider failures into SummarizationFailedError
    - NoteService: owner-scoped note CRUD
"""
