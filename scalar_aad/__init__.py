# scalar_aad/__init__.py
# Reverse-mode automatic differentiation over scalar values

import logging

from .core.var import Value
from .core.tape import Tape, global_tape, get_tape, use_tape
from .core.engine import backward, topological_order, zero_grad
from .core.seeds import grad, grads, grads_list, value
from .core.graph_utils import format_graph, get_graph_stats, print_graph_summary, graph_frame
from .ops import add, sub, mul, div, neg, pow, relu
from .config import EngineConfig, get_config, set_config, configure_logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core
    'Value',
    'Tape',
    'global_tape',
    'get_tape',
    'use_tape',
    # Engine
    'backward',
    'topological_order',
    'zero_grad',
    # Seeds
    'grad',
    'grads',
    'grads_list',
    'value',
    # Ops
    'add', 'sub', 'mul', 'div', 'neg', 'pow', 'relu',
    # Diagnostics
    'format_graph',
    'get_graph_stats',
    'print_graph_summary',
    'graph_frame',
    # Config
    'EngineConfig',
    'get_config',
    'set_config',
    'configure_logging',
]
