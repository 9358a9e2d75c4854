"""Global configuration values."""

import os

# Model provider used for recommendations ("openai" or "gemini")
LLM_PROVIDER = os.environ.get("LLM_PROVIDER", "openai").lower()

# Default models (can be overridden via env)
OPENAI_MODEL = os.environ.get("OPENAI_MODEL", "gpt-4o")
GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.0-flash")

# Token budget per chunk (whitespace-delimited tokens, not model tokens)
MAX_TOKENS = int(os.environ.get("MAX_TOKENS", "15000"))

# "combined": one prompt for the whole export; "per_chunk": one model call per chunk
CHUNK_MODE = os.environ.get("CHUNK_MODE", "combined").lower()

# Themes that select the seasonal templates
SEASONAL_THEMES = frozenset(
    t.strip().lower()
    for t in os.environ.get("SEASONAL_THEMES", "valentine").split(",")
    if t.strip()
)

# Prefix of the temporary file mirroring the filtered chat lines
MIRROR_FILE_PREFIX = os.environ.get("MIRROR_FILE_PREFIX", "processed_kakaochat")
