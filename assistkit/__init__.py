"""Models and endpoint wrappers for assistant threads, runs, vector stores, speech, event streams and rate-limit headers."""

__version__ = "0.1.0"

__all__ = ["ratelimit", "runs", "speech", "streaming", "threads", "vector_stores"]