"""Port for the interactive prompt collaborator."""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class PromptPort(Protocol):
    """Ask the user for input.

    ``options`` carries ``type`` (``text``, ``confirm``, ``select``,
    ``multiselect``), mode specific fields, and the ``cancel`` policy.
    """

    def __call__(self, message: str, options: Mapping[str, Any]) -> Any: ...


__all__ = ["PromptPort"]
