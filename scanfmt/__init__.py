"""Human-readable formatting of block explorer API responses, with a small HTTP client."""

__version__ = "0.5.0"