"""
Typed user options and the in-place parameter editor.

Each option value is a ``ParamValue``: a small mutable carrier that knows how
to render itself, clone itself and re-parse itself from text without ever
changing its concrete kind.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Annotated, Any, Optional

from pydantic import Field, TypeAdapter, ValidationError

from roads.utils import WrappingList

WIDTH_OPTION = "Width"
HEIGHT_OPTION = "Height"
STROKE_WIDTH_OPTION = "Line width"
BACKGROUND_COLOR_OPTION = "Background color"
OPEN_OPTION = "Open on save"

PositiveReal = TypeAdapter(Annotated[float, Field(gt=0, allow_inf_nan=False)])
NonNegativeReal = TypeAdapter(Annotated[float, Field(ge=0, allow_inf_nan=False)])
AnyReal = TypeAdapter(Annotated[float, Field(allow_inf_nan=False)])
Text = TypeAdapter(str)
Flag = TypeAdapter(bool)


class ParamValue(ABC):
    """A value whose kind is fixed at construction."""

    adapter: TypeAdapter

    def __init__(self, value: Any):
        self.value = self.adapter.validate_python(value)

    def parse(self, text: str) -> bool:
        """Replace the value with the parsed text; False leaves it untouched."""
        try:
            self.value = self.adapter.validate_python(text)
        except ValidationError:
            return False
        return True

    @abstractmethod
    def render(self) -> str: ...

    @abstractmethod
    def clone(self) -> "ParamValue": ...

    def __str__(self) -> str:
        return self.render()

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.value == other.value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"


class RealParam(ParamValue):
    def __init__(self, value: float, adapter: TypeAdapter = AnyReal):
        self.adapter = adapter
        super().__init__(value)

    def parse(self, text: str) -> bool:
        return super().parse(text.strip())

    def render(self) -> str:
        return f"{self.value:.15g}"

    def clone(self) -> "RealParam":
        return RealParam(self.value, self.adapter)


class StringParam(ParamValue):
    adapter = Text

    def render(self) -> str:
        return self.value

    def clone(self) -> "StringParam":
        return StringParam(self.value)


class BoolParam(ParamValue):
    adapter = Flag

    def parse(self, text: str) -> bool:
        return super().parse(text.strip())

    def render(self) -> str:
        return "true" if self.value else "false"

    def clone(self) -> "BoolParam":
        return BoolParam(self.value)


@dataclass
class Option:
    name: str
    value: ParamValue

    def render(self, pad: int = 0) -> str:
        return f"{self.name}: {' ' * (pad - len(self.name))}{self.value.render()}"


def default_options() -> WrappingList[Option]:
    return WrappingList(
        [
            Option(WIDTH_OPTION, RealParam(1920.0, PositiveReal)),
            Option(HEIGHT_OPTION, RealParam(1080.0, PositiveReal)),
            Option(STROKE_WIDTH_OPTION, RealParam(0.3, NonNegativeReal)),
            Option(BACKGROUND_COLOR_OPTION, StringParam("none")),
            Option(OPEN_OPTION, BoolParam(True)),
        ]
    )


def option_value(options: WrappingList[Option], name: str) -> Any:
    for option in options:
        if option.name == name:
            return option.value.value
    raise KeyError(f"parameter {name} not found")


def max_name_len(options: WrappingList[Option]) -> int:
    return max((len(o.name) for o in options), default=0)


class ParamEditState:
    """Edit buffer for one option, re-validated on every keystroke."""

    def __init__(self, value: ParamValue):
        self.buffer = value.render()
        self.value = value.clone()
        self.is_valid = self.value.parse(self.buffer)

    def set_buffer(self, buffer: str) -> None:
        self.buffer = buffer
        self.is_valid = self.value.parse(buffer)

    def commit(self) -> Optional[ParamValue]:
        """The edited value, or None while the buffer does not parse."""
        return self.value if self.is_valid else None

