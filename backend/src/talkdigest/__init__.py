"""TalkDigest - mailbox ingestion and AI talk summaries."""

__version__ = "0.1.0"
