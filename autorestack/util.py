from typing import List, Sequence, TypeVar

T = TypeVar('T')


def format_branch_list(names: Sequence[str]) -> str:
    """Join names as inline code for a sentence: `a`, `a` and `b`, `a`, `b`, and `c`."""
    quoted = [f"`{name}`" for name in names]
    if len(quoted) <= 1:
        return "".join(quoted)
    if len(quoted) == 2:
        return f"{quoted[0]} and {quoted[1]}"
    return ", ".join(quoted[:-1]) + f", and {quoted[-1]}"


def unique(items: Sequence[T]) -> List[T]:
    """Drop repeated items, keeping first-seen order."""
    seen: List[T] = []
    for item in items:
        if item not in seen:
            seen.append(item)
    return seen
