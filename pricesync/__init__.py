"""pricesync: reconcile vendor price lists against a company catalog export by MPN."""

__version__ = "0.1.0"
