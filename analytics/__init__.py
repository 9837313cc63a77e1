"""Core (UI-agnostic) university dashboard logic.

This package contains:
- sheet rows -> records normalization and numeric coercion
- filter normalization and record filtering
- group-by summarizers shared by every dashboard
- per-dashboard compute functions (JSON-serializable payloads)
- the Google Sheets row fetcher and environment configuration
"""
