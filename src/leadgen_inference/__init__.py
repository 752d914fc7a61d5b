"""
AI provider orchestration layer for the lead-generation backend.

Turns a free-text business requirement into structured data:
- A ranked list of decision-maker roles
- A short list of industry labels (primary first)

Architecture: primary/secondary provider failover (OpenAI -> Gemini) with
adaptive backoff, error classification, tolerant JSON extraction and
validation/normalization of the model output.
"""

__version__ = "0.1.0"
