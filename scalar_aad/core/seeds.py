# scalar_aad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the tape.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List

import numpy as np

from .var import Value
from .tape import use_tape
from .engine import backward


def value(x: Any) -> Any:
    """Return the numeric value of a Value; pass through plain numbers unchanged."""
    return x.val if isinstance(x, Value) else x


def _run(y: Any):
    # a constant output does not depend on any input
    if isinstance(y, Value):
        backward(y)


def grad(f: Callable[[Value], Value], x0: float) -> np.float64:
    """
    Derivative of y=f(x) at x0.
    Runs one reverse pass within a fresh, isolated tape.
    """
    with use_tape():
        x = Value(x0, name="x")
        _run(f(x))
        return x.grad


def grads(f: Callable[[Dict[str, Value]], Value],
          inputs: Dict[str, float]) -> Dict[str, np.float64]:
    """
    Gradient of y=f(vars) w.r.t. ALL inputs (dict form), from ONE reverse pass.

    Parameters
    ----------
    f       : function taking a dict {name: Value} and returning a Value
    inputs  : dict {name: number}

    Returns
    -------
    dict {name: gradient}  # same key order as `inputs`
    """
    with use_tape():
        xs = {k: Value(v, name=k) for k, v in inputs.items()}
        _run(f(xs))
        return {k: xs[k].grad for k in inputs}


def grads_list(f: Callable[[List[Value]], Value],
               x0_list: Iterable[float]) -> List[np.float64]:
    """
    Same as grads(), but inputs and result are lists.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    grads_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    with use_tape():
        xs = [Value(v, name=f"x{i}") for i, v in enumerate(x0_list)]
        _run(f(xs))
        return [x.grad for x in xs]
