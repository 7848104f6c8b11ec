"""
User interface module for the wasteland combat resolver.

This module provides the console narration rendered from combat events and
the command-line input adapter for human-controlled sides.
"""
