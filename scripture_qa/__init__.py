"""Scripture QA Service: keyword question answering over Quran and Hadith.

This package answers free-text queries with excerpts from two static
collections loaded once at startup:
- Quran verses (reference lookup and ranked search)
- Hadith sayings (ranked search)

Query understanding is rule based: marker words pick the collection,
a fixed synonym table expands the terms, and a term-frequency heuristic
ranks the records.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
