"""DSA Coach relay: forwards coaching prompts to the generative model."""

__version__ = "1.0.0"
