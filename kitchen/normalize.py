from typing import Any, List


def to_instruction_list(value: Any) -> List[Any]:
    """Return instructions as an ordered list of steps.

    A list is kept as given. A single string is split on newlines and
    blank lines are dropped, so ``"Step1\\nStep2\\n\\n"`` becomes
    ``["Step1", "Step2"]``. Anything else yields an empty list.
    """
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, str):
        return [line for line in value.split("\n") if line.strip()]
    return []


def to_ingredient_list(value: Any) -> List[Any]:
    # keyed form {"0": "...", "1": "..."} comes from form arrays; keys are dropped
    if value is None:
        return []
    if isinstance(value, dict):
        return list(value.values())
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def normalize_title(s: str) -> str:
    """Key for case-insensitive title and chef matching (Unicode casefold)."""
    if not s:
        return ""
    return s.strip().casefold()


def normalize_email(s: str) -> str:
    if not s:
        return ""
    return s.strip().lower()
