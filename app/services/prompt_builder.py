"""Prompt templates for the three text actions."""

import enum
from typing import Optional


class Action(str, enum.Enum):
    SUMMARIZE = "SUMMARIZE"
    REWRITE = "REWRITE"
    EXPLAIN = "EXPLAIN"

    @classmethod
    def resolve(cls, value: Optional[str]) -> "Action":
        """Case-insensitive match; anything unrecognized means EXPLAIN."""
        if value:
            candidate = value.strip().upper()
            if candidate in cls.__members__:
                return cls[candidate]
        return cls.EXPLAIN


TEMPLATES = {
    Action.SUMMARIZE: "Summarize this text:\n{text}",
    Action.REWRITE: "Rewrite this professionally:\n{text}",
    Action.EXPLAIN: "Explain this clearly:\n{text}",
}


def build_prompt(text: str, action: Optional[str]) -> str:
    return TEMPLATES[Action.resolve(action)].format(text=text)
