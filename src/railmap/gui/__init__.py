"""Qt user interface for railmap."""
