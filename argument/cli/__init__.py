"""Command line surface for Argument notes."""
