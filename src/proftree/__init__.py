"""proftree — layered ownership trees for professional taxonomies."""

__version__ = "0.1.0"
