"""
Items system module for the wasteland combat resolver.

This module contains the consumable item catalog and the pools of consumables
each side shares during a fight.
"""
