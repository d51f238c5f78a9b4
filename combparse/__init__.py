"""Building blocks for parser combinators: error types, inputs, parse state, labels and extension parsers."""

__version__ = "0.1.0"
__all__ = ["errors", "rich", "extra", "inputs", "parse_state", "extension", "label"]