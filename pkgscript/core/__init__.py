"""Core — selection engine, execution model, and their collaborators."""
