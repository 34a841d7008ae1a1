# scalar_aad/core/engine.py
from __future__ import annotations
import logging
from typing import List, Optional

import numpy as np

from . import tape as tape_mod
from .node import Node
from .var import Value
from ..config import get_config

logger = logging.getLogger(__name__)


def zero_grad(tape: Optional[tape_mod.Tape] = None):
    """
    Set every gradient on the tape (default: the active one) to zero.
    """
    tape = tape if tape is not None else tape_mod.get_tape()
    for node in tape.nodes:
        node.grad = np.float64(0.0)


def _postorder(nodes: List[Node], root: int) -> List[int]:
    """
    Iterative depth-first postorder over operand indices starting at `root`.
    Each reachable index appears exactly once, after all of its operands.
    """
    order = []
    visited = set()
    stack = [(root, False)]  # (idx, expanded?)

    while stack:
        i, expanded = stack.pop()
        if expanded:
            order.append(i)
            continue
        if i in visited:
            continue
        visited.add(i)

        stack.append((i, True))
        for j in reversed(nodes[i].operands):
            if j not in visited:
                stack.append((j, False))
    return order


def topological_order(root: Value) -> List[Value]:
    """
    Nodes reachable from `root`, each listed before any of its operands.
    root is always first.
    """
    post = _postorder(root.tape.nodes, root.idx)
    return [Value._wrap(root.tape, i) for i in reversed(post)]


def _apply_rule(nodes: List[Node], node: Node):
    """
    Chain rule for one node: accumulate node.grad * (∂node/∂operand) into
    each operand. Operand values are read from the tape, which holds the
    values seen at creation.
    """
    tag = node.op_tag
    g = node.grad

    if tag == "none":
        return

    if tag == "add":
        a, b = (nodes[i] for i in node.operands)
        a.grad += g
        b.grad += g
        return

    if tag == "mul":
        a, b = (nodes[i] for i in node.operands)
        # read both values first; a and b may be the same node (x * x)
        av, bv = a.val, b.val
        a.grad += bv * g
        b.grad += av * g
        return

    if tag == "pow":
        a = nodes[node.operands[0]]
        n = node.params[0]
        a.grad += n * a.val ** (n - 1) * g
        return

    if tag == "relu":
        a = nodes[node.operands[0]]
        a.grad += (1.0 if node.val > 0 else 0.0) * g
        return

    raise ValueError(f"No derivative rule for op_tag {tag!r}")


def backward(root: Value, *, check_zero: Optional[bool] = None):
    """
    Run a single reverse pass from `root`.

    Args:
        root: output node; its gradient is set to 1.0.
        check_zero: raise RuntimeError if any reachable node already holds a
            nonzero gradient. Defaults to EngineConfig.check_zero_grads.

    Notes:
        - Gradients are accumulated, never reset here. A second call without
          zero_grad() re-seeds the root to 1.0, but intermediate nodes still
          hold their first-pass gradients and push them down again. Leaves of
          a single operation double; deeper leaves grow faster.
        - Order is reversed DFS postorder, so a shared operand has received
          contributions from all of its consumers before its own rule runs.
    """
    nodes = root.tape.nodes
    post = _postorder(nodes, root.idx)

    if check_zero is None:
        check_zero = get_config().check_zero_grads
    if check_zero:
        dirty = [i for i in post if nodes[i].grad != 0]
        if dirty:
            logger.warning("backward: %d reachable node(s) carry residual gradients", len(dirty))
            raise RuntimeError(
                f"{len(dirty)} node(s) reachable from the root have nonzero gradients; "
                f"call zero_grad() before running backward again"
            )

    logger.debug("backward: root=%d, %d reachable node(s)", root.idx, len(post))

    nodes[root.idx].grad = np.float64(1.0)
    for i in reversed(post):
        _apply_rule(nodes, nodes[i])
