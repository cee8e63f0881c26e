"""Subcommand parsers and handlers for the qrscan CLI."""
