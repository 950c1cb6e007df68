"""An AI-powered assistant that turns plain English into shell commands."""

__version__ = "0.1.0"
