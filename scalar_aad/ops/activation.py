# scalar_aad/ops/activation.py
from ..core.var import Value


def relu(x):
    """
    Rectified linear unit: out.val = max(0, x.val).

    The backward rule tests out.val > 0, so the gradient at x.val == 0 is 0.
    """
    if not isinstance(x, Value):
        raise TypeError(f"relu() expects a Value, but got {type(x)}")
    v = x.val
    idx = x.tape.push_node(op_tag="relu", val=0.0 if v < 0 else v, operands=(x.idx,))
    return Value._wrap(x.tape, idx)
