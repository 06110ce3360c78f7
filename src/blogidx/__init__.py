"""blogidx - front-matter validation and content index for static blogs."""

__version__ = "0.3.0"
