"""Bootstrap table-editor documentation sites from ontology repositories."""

__version__ = "0.3.0"
