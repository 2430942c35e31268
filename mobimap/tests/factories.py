"""
Option and weight builders shared by the tests.
"""

from mobimap.logic import UniversityOption, Weights


def build_option(option_id="opt", **fields):
    fields.setdefault("name", option_id.title())
    return UniversityOption(id=option_id, **fields)


def only_weight(field, value=10):
    """Weights with every coefficient at zero except one."""
    zeros = {name: 0 for name in Weights.model_fields}
    zeros[field] = value
    return Weights(**zeros)
