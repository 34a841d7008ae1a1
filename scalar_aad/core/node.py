# scalar_aad/core/node.py
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

# Tags understood by the backward dispatcher in engine.py
OP_TAGS = ("none", "add", "mul", "pow", "relu")


@dataclass
class Node:
    """
    One scalar stored on the tape.

    Attributes
    ----------
    op_tag : str
        Which derivative rule applies ("none" for leaves, else "add", "mul",
        "pow" or "relu").
    val : np.float64
        Forward value. Never changed after the node is recorded.
    grad : np.float64
        Accumulated d(output)/d(this node).
    operands : Tuple[int, ...]
        Tape indices of the 0, 1 or 2 nodes consumed to produce this one.
    params : Tuple[float, ...]
        Extra rule data beyond operand values (the exponent for "pow").
    name : Optional[str]
        Debug label.
    """
    op_tag: str
    val: np.float64
    grad: np.float64 = np.float64(0.0)
    operands: Tuple[int, ...] = ()
    params: Tuple[float, ...] = ()
    name: Optional[str] = None
