import re
from typing import Iterable, Pattern, Tuple, Union


class IgnoreFilter:
    """Ordered list of regular expressions; a value is ignored if any of them fully matches.

    Read-only after construction, so workers may share one instance without locking.
    """

    def __init__(self, patterns: Iterable[Union[str, Pattern[str]]] = ()):
        self._patterns: Tuple[Pattern[str], ...] = tuple(
            p if isinstance(p, re.Pattern) else re.compile(p) for p in patterns
        )

    @property
    def patterns(self) -> Tuple[Pattern[str], ...]:
        return self._patterns

    def matches(self, value: str) -> bool:
        for pattern in self._patterns:
            if pattern.fullmatch(value):
                return True
        return False

    def __len__(self) -> int:
        return len(self._patterns)

    def __repr__(self):
        return f"<IgnoreFilter patterns={[p.pattern for p in self._patterns]}>"
