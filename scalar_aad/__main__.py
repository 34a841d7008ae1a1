"""
Demo: x = 3, y = 2; print x*y, x+y, x**2 and relu(x) after a backward pass each.

    python -m scalar_aad --depth 2 --log-level DEBUG
"""

import argparse

from . import Value, backward, configure_logging, format_graph, use_tape


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Scalar reverse-mode AD demo',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--depth', type=int, default=None,
                        help='Maximum depth of the printed graph')
    parser.add_argument('--log-level', type=str, default=None,
                        help='Logging level (defaults to SCALAR_AAD_LOG_LEVEL)')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_level)

    builders = [
        ("x * y", lambda x, y: x * y),
        ("x + y", lambda x, y: x + y),
        ("x ** 2", lambda x, y: x ** 2),
        ("relu(x)", lambda x, y: x.relu()),
    ]
    for label, build in builders:
        # fresh graph per expression so gradients do not accumulate across them
        with use_tape():
            x, y = Value(3.0, name="x"), Value(2.0, name="y")
            out = build(x, y)
            backward(out)
            print(f"{label}:")
            print(format_graph(out, max_depth=args.depth))
            print()


if __name__ == "__main__":
    main()
