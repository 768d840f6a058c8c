"""Table of the image operations offered to front ends.

Each entry maps a menu number and a key to a transform and the parameters
it needs, so callers never branch on the selection themselves.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

import bmp_transforms
from bmp_errors import InvalidImageError, InvalidParameterError, UnknownOperationError
from bmp_settings import ProcessorSettings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Param:
    name: str
    kind: type  # int or float
    label: str
    minimum: float | None = None
    default: float | None = None


@dataclass(frozen=True)
class Operation:
    number: int
    key: str
    label: str
    func: Callable
    params: tuple[Param, ...] = ()

    @property
    def accepts_clamp(self) -> bool:
        return "clamp" in inspect.signature(self.func).parameters


SCALE = Param(
    "scaling_factor", float, "Scaling factor",
    default=ProcessorSettings.model_fields["default_scale_factor"].default,
)

OPERATIONS: tuple[Operation, ...] = (
    Operation(1, "vignette", "Vignette", bmp_transforms.vignette),
    Operation(2, "clarendon", "Clarendon", bmp_transforms.clarendon, (SCALE,)),
    Operation(3, "grayscale", "Grayscale", bmp_transforms.grayscale),
    Operation(4, "rotate_90", "Rotate 90 degrees", bmp_transforms.rotate_90),
    Operation(5, "rotate", "Rotate multiple 90 degrees", bmp_transforms.rotate,
              (Param("number", int, "Number of 90-degree rotations", default=1),)),
    Operation(6, "enlarge", "Enlarge", bmp_transforms.enlarge,
              (Param("x_scale", int, "X scale", minimum=1, default=1),
               Param("y_scale", int, "Y scale", minimum=1, default=1))),
    Operation(7, "high_contrast", "High contrast", bmp_transforms.high_contrast),
    Operation(8, "lighten", "Lighten", bmp_transforms.lighten, (SCALE,)),
    Operation(9, "darken", "Darken", bmp_transforms.darken, (SCALE,)),
    Operation(10, "quantize", "Black, white, red, green, blue", bmp_transforms.quantize),
)

_BY_NUMBER = {op.number: op for op in OPERATIONS}
_BY_KEY = {op.key: op for op in OPERATIONS}


def get_operation(identifier: int | str) -> Operation:
    """Look up an operation by menu number (int or digit string) or by key."""
    if isinstance(identifier, str):
        text = identifier.strip()
        # Plain decimal digits only; int() rejects superscripts
        if text.isdecimal():
            identifier = int(text)
        else:
            op = _BY_KEY.get(text.lower())
            if op is None:
                raise UnknownOperationError(identifier)
            return op
    if isinstance(identifier, bool) or not isinstance(identifier, int) or identifier not in _BY_NUMBER:
        raise UnknownOperationError(identifier)
    return _BY_NUMBER[identifier]


def param_default(param: Param, settings: ProcessorSettings | None = None) -> int | float | None:
    """Value a front end should pre-fill for param; scale factors follow the settings."""
    if param.name == SCALE.name:
        return (settings or get_settings()).default_scale_factor
    return param.default


def _coerce(param: Param, value: Any) -> int | float:
    if isinstance(value, bool):
        raise InvalidParameterError(param.name, value)
    try:
        if param.kind is int:
            if isinstance(value, float):
                if not value.is_integer():
                    raise ValueError(value)
                converted = int(value)
            else:
                converted = int(str(value).strip())
        else:
            converted = float(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidParameterError(
            param.name, value, f"{param.label} must be {'an integer' if param.kind is int else 'a number'}, got {value!r}"
        ) from None
    if param.minimum is not None and converted < param.minimum:
        raise InvalidParameterError(
            param.name, value, f"{param.label} must be at least {param.minimum:g}, got {converted}"
        )
    return converted


def coerce_params(operation: Operation, values: Mapping[str, Any] | None) -> dict[str, int | float]:
    """Convert raw parameter values (numbers or text from a UI) to the schema's types."""
    values = dict(values or {})
    result = {}
    for param in operation.params:
        if param.name not in values:
            raise InvalidParameterError(param.name, None, f"Missing parameter: {param.name}")
        result[param.name] = _coerce(param, values.pop(param.name))
    if values:
        unexpected = ", ".join(sorted(values))
        raise InvalidParameterError(unexpected, None, f"Unexpected parameters for {operation.key}: {unexpected}")
    return result


def apply_operation(
    identifier: int | str,
    image: list,
    params: Mapping[str, Any] | None = None,
    settings: ProcessorSettings | None = None,
) -> list:
    """Run one operation on an image and return the new image."""
    operation = get_operation(identifier)
    if not image or not image[0]:
        raise InvalidImageError(f"Cannot apply {operation.key} to an empty image")

    kwargs = coerce_params(operation, params)
    settings = settings or get_settings()
    if operation.accepts_clamp:
        kwargs["clamp"] = settings.clamp_channels

    result = operation.func(image, **kwargs)
    logger.info(
        "Applied %s %s: %dx%d -> %dx%d",
        operation.key, kwargs, len(image[0]), len(image), len(result[0]), len(result),
    )
    return result
