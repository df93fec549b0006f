"""Generative model providers for the relay."""
