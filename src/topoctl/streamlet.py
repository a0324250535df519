"""Output stream contract shared by all streamlet operators.

Every operator emits a single stream with one field, so any operator can
consume any other operator's output.
"""

from typing import Protocol, Sequence

OUTPUT_FIELD_NAME = "output"
OUTPUT_FIELDS: tuple[str, ...] = (OUTPUT_FIELD_NAME,)


class OutputFieldsDeclarer(Protocol):
    def declare(self, fields: Sequence[str]) -> None:
        ...


def declare_output_fields(declarer: OutputFieldsDeclarer) -> None:
    """Declare the single shared output stream on an operator's declarer."""
    declarer.declare(OUTPUT_FIELDS)
