"""Configuration and invocation readers."""
