"""
Printer for MAL data trees.

Renders a tree back to source text. With ``print_readably`` the output
reads back to an equal tree. Lists are walked with an explicit stack, so
printing works at any depth the reader accepts.

Author: xwest
"""

from typing import List, Optional, Tuple

from .parser.data import Data, Atom, AtomKind, ListData, format_integer


def escape(text: str) -> str:
    """Escape backslashes, double quotes and newlines for a string literal."""
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def _atom_str(atom: Atom, print_readably: bool) -> str:
    if atom.atom_kind is AtomKind.STRING:
        if print_readably:
            return f'"{escape(atom.value)}"'
        return atom.value
    if atom.atom_kind is AtomKind.NUMBER:
        return format_integer(atom.value)
    return atom.value


def pr_str(data: Data, print_readably: bool = True) -> str:
    """
    Render ``data`` as source text.

    Args:
        data: Tree to print
        print_readably: Quote and escape strings so the text reads back
            to an equal tree; otherwise strings print raw

    Raises:
        TypeError: If a node is neither an ``Atom`` nor a ``ListData``
    """
    if data is None:
        raise TypeError("cannot print NoneType")

    parts: List[str] = []
    # Pending work, last in first out: a node to print, or literal text
    stack: List[Tuple[Optional[Data], str]] = [(data, "")]

    while stack:
        node, text = stack.pop()
        if node is None:
            parts.append(text)
        elif isinstance(node, ListData):
            stack.append((None, node.closing_bracket))
            for i in range(len(node.items) - 1, -1, -1):
                stack.append((node.items[i], ""))
                if i:
                    stack.append((None, " "))
            parts.append(node.bracket)
        elif isinstance(node, Atom):
            parts.append(_atom_str(node, print_readably))
        else:
            raise TypeError(f"cannot print {type(node).__name__}")

    return "".join(parts)
