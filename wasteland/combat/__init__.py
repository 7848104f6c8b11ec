"""
Combat system module for the wasteland combat resolver.

This module handles all combat mechanics including session management, turn
scheduling, target validation, action resolution, outcome evaluation and the
decision functions of computer-controlled sides.
"""
