"""Server-rendered HTML fragments."""
