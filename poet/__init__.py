"""poet: pronunciation lookups, rhymes and verse-form checks for English text."""

__version__ = "0.1.0"
