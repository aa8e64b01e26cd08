"""
phaseflow Template Suggester
"""

from .suggester import SUGGESTION_ORDER, suggest_template

__all__ = ["SUGGESTION_ORDER", "suggest_template"]
