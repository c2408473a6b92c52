"""Gemstone registration and certificate verification backend."""
