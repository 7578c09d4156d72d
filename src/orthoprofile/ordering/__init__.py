"""
Profile ordering submodule.
"""

from orthoprofile.ordering._orderer import count_occurrences, order_profile

__all__ = ["order_profile", "count_occurrences"]
