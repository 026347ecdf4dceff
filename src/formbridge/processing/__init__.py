"""Form component tree processing."""

from formbridge.processing.prefill import prefill_values
from formbridge.processing.rekey import rekey_by_type
from formbridge.processing.required_fields import extract_required_fields, select_branch
from formbridge.processing.tree import build_tree, flatten_forest

__all__ = [
    "build_tree",
    "extract_required_fields",
    "flatten_forest",
    "prefill_values",
    "rekey_by_type",
    "select_branch",
]
