"""Validators for the Deck Probability Calculator.

Pure Python checks run by callers before invoking the engine.
"""

from backend.services.validators.input_validator import InputValidator

__all__ = ["InputValidator"]
