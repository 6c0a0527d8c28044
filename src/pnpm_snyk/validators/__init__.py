"""Validators for emitted lockfiles."""
