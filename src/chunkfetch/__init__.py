"""On-demand HTTP fetcher that pages oversized bodies across invocations."""

__version__ = "0.1.0"
