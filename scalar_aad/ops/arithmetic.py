# scalar_aad/ops/arithmetic.py
import numbers

from ..core.var import Value


def _as_value(x, tape):
    """Ensure x is a Value; otherwise record it as a constant leaf on `tape`."""
    return x if isinstance(x, Value) else Value(x, tape=tape)


def _operands(x, y):
    """
    Coerce a binary op's inputs onto one tape. Plain numbers become leaves on
    the tape of whichever side is already a Value.
    """
    if isinstance(x, Value):
        tape = x.tape
    elif isinstance(y, Value):
        tape = y.tape
    else:
        raise TypeError(
            f"At least one operand must be a Value, but got {type(x)} and {type(y)}"
        )
    x = _as_value(x, tape)
    y = _as_value(y, tape)
    if x.tape is not y.tape:
        raise ValueError("Operands belong to different tapes")
    return x, y


def _binary(x, y, f, tag):
    """
    Generic binary primitive:
      - computes out.val = f(x.val, y.val)
      - records a Node with operands (x, y); the rule lives in engine._apply_rule
    """
    x, y = _operands(x, y)
    idx = x.tape.push_node(op_tag=tag, val=f(x.val, y.val), operands=(x.idx, y.idx))
    return Value._wrap(x.tape, idx)


def add(x, y): return _binary(x, y, lambda a, b: a + b, "add")
def mul(x, y): return _binary(x, y, lambda a, b: a * b, "mul")


def pow(x, n):
    """
    Power with a constant real exponent:
      out.val = x.val ** n

    `n` is stored as a rule parameter, not as a graph node. Domain problems
    (negative base with fractional n, zero base with negative n) are left to
    NumPy and come out as nan/inf.
    """
    if isinstance(n, Value):
        raise TypeError("pow() exponent must be a real number, not a Value")
    if isinstance(n, bool) or not isinstance(n, numbers.Real):
        raise TypeError(f"pow() exponent must be a real number, but got {type(n)}")
    if not isinstance(x, Value):
        raise TypeError(f"pow() base must be a Value, but got {type(x)}")
    idx = x.tape.push_node(op_tag="pow", val=x.val ** n, operands=(x.idx,), params=(n,))
    return Value._wrap(x.tape, idx)


# Derived operators: compositions of the primitives above, no new tags
def neg(x):
    if not isinstance(x, Value):
        raise TypeError(f"neg() expects a Value, but got {type(x)}")
    return mul(x, -1.0)


def sub(x, y):
    x, y = _operands(x, y)
    return add(x, neg(y))


def div(x, y):
    x, y = _operands(x, y)
    return mul(x, pow(y, -1.0))
