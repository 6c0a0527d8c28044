"""Parsers for pnpm lockfiles and their package keys."""
