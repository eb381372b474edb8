"""Earl Box - upload a file, get a public link."""

__version__ = "1.0.0"
