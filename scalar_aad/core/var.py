# scalar_aad/core/var.py
from __future__ import annotations
import numbers
from typing import Optional, Tuple

import numpy as np

from . import tape as tape_mod  # module access so use_tape() is honoured
from .node import Node


class Value:
    """
    Handle to one scalar node on a tape.

    `Value(x)` records a leaf on the active tape. Operations return new
    handles; the handle itself only stores (tape, idx), and every field is read
    from the tape.

    Attributes
    ----------
    val : np.float64
        Forward value.
    grad : np.float64
        Gradient accumulated by the last backward pass(es).
    op_tag : str
        "none" for leaves, else the producing operation.
    operands : Tuple[Value, ...]
        Handles of the nodes this one was computed from.
    """

    __slots__ = ("tape", "idx")

    def __init__(self, val, *, name: Optional[str] = None, tape: Optional[tape_mod.Tape] = None):
        # bool is a numbers.Real subclass but almost always a caller mistake here
        if isinstance(val, bool) or not isinstance(val, numbers.Real):
            raise TypeError(
                f"Value only accepts real scalars (int, float, numpy real), but got {type(val)}"
            )
        self.tape = tape if tape is not None else tape_mod.get_tape()
        self.idx = self.tape.push_node(op_tag="none", val=val, name=name)

    @classmethod
    def _wrap(cls, tape: tape_mod.Tape, idx: int) -> "Value":
        """Handle for an existing node, without recording anything."""
        v = object.__new__(cls)
        v.tape = tape
        v.idx = idx
        return v

    @property
    def node(self) -> Node:
        return self.tape.nodes[self.idx]

    @property
    def val(self):
        return self.node.val

    @property
    def grad(self):
        return self.node.grad

    @grad.setter
    def grad(self, g):
        self.node.grad = np.float64(g)

    @property
    def op_tag(self) -> str:
        return self.node.op_tag

    @property
    def params(self) -> Tuple[float, ...]:
        return self.node.params

    @property
    def name(self) -> Optional[str]:
        return self.node.name

    @property
    def operands(self) -> Tuple["Value", ...]:
        return tuple(Value._wrap(self.tape, i) for i in self.node.operands)

    def __eq__(self, other):
        # identity of the underlying node, not numeric equality
        return isinstance(other, Value) and other.tape is self.tape and other.idx == self.idx

    def __hash__(self):
        return hash((id(self.tape), self.idx))

    def __float__(self):
        return float(self.val)

    def __repr__(self):
        return f"Value(val={self.val!r}, grad={self.grad!r}, op={self.op_tag})"

    # Operator overloading for arithmetic operations
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pow__(self, exponent):
        from ..ops.arithmetic import pow
        return pow(self, exponent)

    def relu(self):
        from ..ops.activation import relu
        return relu(self)
