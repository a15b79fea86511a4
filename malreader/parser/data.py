"""
Data tree definitions for the MAL reader.

The parser produces a closed sum type: every node is either an ``Atom``
(number, symbol or string) or a ``ListData`` holding further nodes. Both
carry an explicit discriminant so callers can dispatch on ``kind`` instead
of checking types.

Nodes own their text. Symbol and string contents are decoded out of the
source buffer while parsing, so a tree stays valid after the buffer and the
token list are gone.

Author: xwest
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterator, List, Optional, Union


class DataKind(Enum):
    """Discriminant for the two node variants."""
    ATOM = "atom"
    LIST = "list"


class AtomKind(Enum):
    """Discriminant for leaf values."""
    NUMBER = "number"
    SYMBOL = "symbol"
    STRING = "string"


LIST_BRACKETS = {
    "(": ")",
    "[": "]",
    "{": "}",
}


@dataclass(frozen=True)
class SourceSpan:
    """Byte range ``[start, end)`` a node was read from."""
    start: int
    end: int

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"


class Data(ABC):
    """Base class for all nodes of a parsed tree."""

    kind: ClassVar[DataKind]
    span: Optional[SourceSpan]

    @abstractmethod
    def children(self) -> List["Data"]:
        """Get all child nodes."""

    @property
    def is_atom(self) -> bool:
        return self.kind is DataKind.ATOM

    @property
    def is_list(self) -> bool:
        return self.kind is DataKind.LIST


@dataclass(frozen=True)
class Atom(Data):
    """A leaf value: a parsed integer, a symbol name or string contents."""

    kind: ClassVar[DataKind] = DataKind.ATOM

    atom_kind: AtomKind
    value: Union[int, str]
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        expected = int if self.atom_kind is AtomKind.NUMBER else str
        if not isinstance(self.value, expected) or isinstance(self.value, bool):
            raise TypeError(
                f"{self.atom_kind.value} atom needs a {expected.__name__} value, "
                f"got {self.value!r}"
            )

    @classmethod
    def number(cls, value: int, span: Optional[SourceSpan] = None) -> "Atom":
        return cls(AtomKind.NUMBER, value, span)

    @classmethod
    def symbol(cls, name: str, span: Optional[SourceSpan] = None) -> "Atom":
        return cls(AtomKind.SYMBOL, name, span)

    @classmethod
    def string(cls, text: str, span: Optional[SourceSpan] = None) -> "Atom":
        return cls(AtomKind.STRING, text, span)

    @property
    def is_number(self) -> bool:
        return self.atom_kind is AtomKind.NUMBER

    @property
    def is_symbol(self) -> bool:
        return self.atom_kind is AtomKind.SYMBOL

    @property
    def is_string(self) -> bool:
        return self.atom_kind is AtomKind.STRING

    def children(self) -> List[Data]:
        return []

    def __str__(self) -> str:
        if self.is_number:
            return f"number({format_integer(self.value)})"
        return f"{self.atom_kind.value}({self.value!r})"


@dataclass
class ListData(Data):
    """An ordered sequence of nodes, remembering which bracket opened it."""

    kind: ClassVar[DataKind] = DataKind.LIST

    items: List[Data] = field(default_factory=list)
    bracket: str = "("
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if self.bracket not in LIST_BRACKETS:
            raise ValueError(f"unknown list bracket {self.bracket!r}")

    @property
    def closing_bracket(self) -> str:
        return LIST_BRACKETS[self.bracket]

    def children(self) -> List[Data]:
        return self.items

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Data]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Data:
        return self.items[index]

    def __str__(self) -> str:
        inner = ", ".join(str(item) for item in self.items)
        return f"list{self.bracket}{inner}{self.closing_bracket}"


# Integers are converted in chunks of this many digits, which keeps each
# step under the interpreter's int/str conversion limit
DIGIT_CHUNK = 1000


def format_integer(value: int) -> str:
    """Decimal text of ``value``, however many digits it has."""
    if value < 0:
        return "-" + format_integer(-value)
    base = 10 ** DIGIT_CHUNK
    chunks = []
    while value >= base:
        value, low = divmod(value, base)
        chunks.append(f"{low:0{DIGIT_CHUNK}d}")
    chunks.append(str(value))
    return "".join(reversed(chunks))


def depth(data: Data) -> int:
    """Nesting depth of a tree; an atom has depth 0, ``()`` has depth 1."""
    deepest = 0
    stack = [(data, 0)]
    while stack:
        node, level = stack.pop()
        if node.is_list:
            level += 1
            stack.extend((child, level) for child in node.children())
        deepest = max(deepest, level)
    return deepest
