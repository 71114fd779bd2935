"""Core constants and errors shared by the formatting engine."""
