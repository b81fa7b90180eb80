"""Completion, hinting and command resolution for the interactive shell."""
