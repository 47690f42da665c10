"""
Script generator module.

Writes the hook, per-scene beats and on-screen text, and the call to action.
"""

from modules.script_generator.generator import generate_script

__all__ = ["generate_script"]
