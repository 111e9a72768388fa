"""CLI module for otrsrpc."""
