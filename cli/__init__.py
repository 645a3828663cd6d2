"""Command line interface for the dwhprov toolkit."""
