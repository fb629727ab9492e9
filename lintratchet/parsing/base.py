"""
Declaration tree shared by the parser and the suppression scanner.

Every declaration is the same shape: a kind, the attributes written on it,
and (for containers) the declarations nested directly inside it. Walking the
tree never needs to know which kind of declaration it is looking at.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class Attribute:
    """An attribute such as ``#[allow(dead_code, clippy::foo)]``."""
    name: str
    lints: Tuple[str, ...] = ()
    line: int = 0
    inner: bool = False

    def __str__(self) -> str:
        bang = "!" if self.inner else ""
        if self.lints:
            return f"#{bang}[{self.name}({', '.join(self.lints)})]"
        return f"#{bang}[{self.name}]"


@dataclass
class Declaration:
    """
    A node of the declaration tree.

    ``children`` is ``None`` for leaves and a (possibly empty) list for
    containers. ``known`` is False for declaration kinds the parser does not
    recognize; suppressions on such nodes are not counted.
    """
    kind: str
    attributes: List[Attribute] = field(default_factory=list)
    children: Optional[List["Declaration"]] = None
    line: int = 0
    known: bool = True

    def __repr__(self) -> str:
        return f"Declaration(kind={self.kind!r}, line={self.line}, children={self.child_count})"

    @property
    def is_container(self) -> bool:
        return self.children is not None

    @property
    def child_count(self) -> int:
        """Number of directly nested declarations; 1 for leaves."""
        if not self.is_container:
            return 1
        return len(self.children)

    @property
    def weight(self) -> int:
        """How many declarations a suppression written here shields."""
        return max(self.child_count, 1)

    def walk(self) -> Iterator["Declaration"]:
        """Yield this declaration and every nested one, parents first."""
        yield self
        for child in self.children or ():
            yield from child.walk()

