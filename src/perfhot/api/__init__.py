"""HTTP query surface."""
