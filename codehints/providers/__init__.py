"""Built-in hint providers."""
from codehints.providers.words import WordsProvider

__all__ = ["WordsProvider"]
