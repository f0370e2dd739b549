"""Page count providers."""
