"""
Recommendation Letter Service

LLM-drafted letters of recommendation
- Gemini letter drafting from a structured form
- Per-user letter storage
- PDF / DOCX export
"""

__version__ = "1.0.0"
