"""Tokenizer, format state machine and parsing API."""
