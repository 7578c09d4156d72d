"""
Correction rules submodule.
"""

from orthoprofile.rules._rules import Rule, apply_rules, as_rules, read_rules

__all__ = ["Rule", "apply_rules", "as_rules", "read_rules"]
