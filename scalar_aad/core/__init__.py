# scalar_aad/core/__init__.py

"""
Core public API for the scalar AD package.

Exports:
    Value             : Handle to one scalar node on a tape.
    Tape              : Arena of nodes for one computation.
    global_tape       : The default tape (bound at import; prefer get_tape()).
    get_tape          : The tape new Values are currently recorded on.
    use_tape          : Context manager to temporarily switch the active tape.
    backward          : Run a single reverse pass from an output Value.
    topological_order : Reachable nodes, each before its operands.
    zero_grad         : Reset all gradients on a tape to zero.
    grad, grads, grads_list : Convenience wrappers on an isolated tape.
    value             : Extract the primal value from a Value.
"""

from .var import Value
from .tape import Tape, global_tape, get_tape, use_tape
from .engine import backward, topological_order, zero_grad
from .seeds import grad, grads, grads_list, value

__all__ = [
    "Value",
    "Tape", "global_tape", "get_tape", "use_tape",
    "backward", "topological_order", "zero_grad",
    "grad", "grads", "grads_list", "value",
]
