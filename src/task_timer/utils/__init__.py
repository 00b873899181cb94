"""Utilities shared by the command line."""
