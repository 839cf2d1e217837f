from dataclasses import dataclass
from typing import Any, Callable, List, Optional


@dataclass(frozen=True)
class BuiltinFunction:
    name: str
    fn: Callable[[List[Any]], Any]
    arity: Optional[int] = None  # None means variadic

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
