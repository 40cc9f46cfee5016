"""Extract YouTube transcripts, summarize them and chat about them."""

__version__ = "0.1.0"
