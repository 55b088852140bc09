"""Bus route finder with place-name autocompletion."""

__version__ = "0.1.0"
