"""Broadcast engine, filter policy, renderer, and announcement scheduler."""
