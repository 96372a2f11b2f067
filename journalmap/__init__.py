"""journalmap: adaptive clustering of geotagged journal entries for map views."""

__version__ = "1.0.0"
