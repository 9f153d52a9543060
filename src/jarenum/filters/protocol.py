"""Protocol for class name filters."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ClassFilter(Protocol):
    """Decides whether a class should be parsed at all.

    Filters see the internal class name without the ``.class`` suffix
    (e.g. ``com/foo/Status``) and must not depend on archive state.
    """

    def accepts(self, class_name: str) -> bool:
        """Return True if the class should be read.

        Raises:
            FilterError: if the decision cannot be made.
        """
        ...
