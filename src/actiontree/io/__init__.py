from .errors import LoaderError
from .tree_loader import load_context, load_tree

__all__ = ["LoaderError", "load_context", "load_tree"]
