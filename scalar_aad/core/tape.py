# scalar_aad/core/tape.py
from __future__ import annotations
from typing import List, Optional, Tuple
from contextlib import contextmanager
import logging

import numpy as np

from .node import Node, OP_TAGS

logger = logging.getLogger(__name__)


class Tape:
    """
    Arena of Nodes for one computation, in creation order.

    Nodes refer to their operands by index, so every node recorded here stays
    addressable until the tape itself is reset or dropped.
    """
    def __init__(self):
        self.nodes: List[Node] = []

    def __len__(self):
        return len(self.nodes)

    def __getitem__(self, idx: int) -> Node:
        return self.nodes[idx]

    def reset(self):
        self.nodes.clear()

    def push_node(self, *, op_tag: str, val, operands: Tuple[int, ...] = (),
                  params: Tuple[float, ...] = (), name: Optional[str] = None) -> int:
        """
        Append a Node and return its index.

        Operands must already be on this tape, which keeps the graph acyclic.
        """
        if op_tag not in OP_TAGS:
            raise ValueError(f"Unknown op_tag {op_tag!r}; expected one of {OP_TAGS}")
        idx = len(self.nodes)
        for i in operands:
            if not 0 <= i < idx:
                raise ValueError(
                    f"Operand index {i} is not an existing node (tape has {idx} nodes)"
                )
        self.nodes.append(Node(op_tag=op_tag, val=np.float64(val),
                               operands=tuple(operands), params=tuple(params), name=name))
        return idx


# Global default tape
global_tape = Tape()


def get_tape() -> Tape:
    """Return the tape new Values are recorded on."""
    return global_tape


@contextmanager
def use_tape(tape: Optional[Tape] = None):
    """
    Context manager to temporarily record on a fresh (or given) tape:
        with use_tape():
            ... build computation ...
            backward(y)
    """
    global global_tape
    prev = global_tape
    try:
        global_tape = tape if tape is not None else Tape()
        logger.debug("switched to tape %#x", id(global_tape))
        yield global_tape
    finally:
        global_tape = prev
