"""
BriefOS - Daily CCaaS Intelligence Briefs

Pipeline stages:
1. Credentials - Resolve a Gemini API key (or fall back to demo mode)
2. Generation - Search-grounded Gemini call with a bounded wait
3. Normalization - Strict validation of the model's JSON reply
4. Storage - Append-only brief history (SQLite, in-memory fallback)
"""

__version__ = "1.0.0"
