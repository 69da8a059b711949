"""
Application layer.

Use-case services (reconciler, bulk ingestor, notification dispatcher,
birthday announcer) and the background runner for fire-and-forget work.
"""
