"""Command schema: the immutable tree built from the server command catalogue."""
