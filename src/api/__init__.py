"""Bookmarks REST API."""
