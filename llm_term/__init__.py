"""
CLI tool for turning natural language into a single shell command.

This package asks a language model (OpenAI, a local Ollama server or any
OpenAI-compatible endpoint) for one command that fulfils the user's request,
shows it, and runs it through the user's shell only after confirmation.
Generated commands are cached per prompt so repeated requests skip the model.
"""

__version__ = "1.0.0"
