"""Infrastructure adapters: IMAP, MIME ingest, extractors, LLM providers, scratch storage"""
