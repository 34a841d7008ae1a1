"""
Graph diagnostics: recursive dump, statistics and a tabular view of a tape.
"""

from collections import Counter
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from .tape import Tape
from .var import Value


def format_graph(root: Value, max_depth: Optional[int] = None) -> str:
    """
    Human-readable dump of `root` and, recursively, its operands.

    Args:
        root: node to start from
        max_depth: stop descending below this depth (None: no limit)

    Returns:
        One line per node, indented by depth. A node shared by several
        consumers is expanded once; later visits print a "(see above)" line. A
        node cut off by max_depth is printed again in full if it is reached
        at a shallower depth.
    """
    nodes = root.tape.nodes
    lines: List[str] = []
    seen = set()
    stack = [(root.idx, 0)]

    while stack:
        i, depth = stack.pop()
        node = nodes[i]
        pad = "  " * depth
        label = f" name={node.name}" if node.name else ""
        if i in seen:
            lines.append(f"{pad}#{i} (see above)")
            continue
        lines.append(f"{pad}#{i} Value: data={node.val}, grad={node.grad}, op={node.op_tag}{label}")
        if node.operands and max_depth is not None and depth >= max_depth:
            # not marked seen: a shallower visit may still expand it
            lines.append(f"{pad}  ...")
            continue
        seen.add(i)
        for j in reversed(node.operands):
            stack.append((j, depth + 1))
    return "\n".join(lines)


def get_graph_stats(tape: Tape) -> Dict:
    """
    Statistics of the tape (no printing).

    Returns:
        dict with nodes, edges, leaves, fan-in/fan-out and an op breakdown
    """
    n_nodes = len(tape.nodes)
    if n_nodes == 0:
        return {
            'nodes': 0,
            'edges': 0,
            'leaves': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'operations': {}
        }

    fan_ins = [len(node.operands) for node in tape.nodes]
    fan_outs = [0] * n_nodes
    for node in tape.nodes:
        for j in node.operands:
            fan_outs[j] += 1

    return {
        'nodes': n_nodes,
        'edges': sum(fan_ins),
        'leaves': sum(1 for node in tape.nodes if node.op_tag == "none"),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'operations': dict(Counter(node.op_tag for node in tape.nodes))
    }


def print_graph_summary(tape: Tape) -> Dict:
    """Print get_graph_stats() in a small report and return the dict."""
    stats = get_graph_stats(tape)
    if not stats['nodes']:
        print("Empty computation graph")
        return stats

    print("=" * 50)
    print("COMPUTATION GRAPH SUMMARY")
    print("=" * 50)
    print(f"Total nodes:        {stats['nodes']:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Leaves:             {stats['leaves']:,}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print("Operation breakdown:")
    for op, count in Counter(stats['operations']).most_common():
        pct = 100.0 * count / stats['nodes']
        print(f"  {op:6s}: {count:6,} ({pct:5.1f}%)")
    print("=" * 50)
    return stats


def graph_frame(tape: Tape) -> pd.DataFrame:
    """One row per node on the tape, indexed by tape position."""
    rows = [
        {
            'op': node.op_tag,
            'val': float(node.val),
            'grad': float(node.grad),
            'operands': node.operands,
            'params': node.params,
            'name': node.name,
        }
        for node in tape.nodes
    ]
    df = pd.DataFrame(rows, columns=['op', 'val', 'grad', 'operands', 'params', 'name'])
    df.index.name = 'idx'
    return df
