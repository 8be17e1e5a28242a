"""
controls.py
===========

Declared parameter controls, presets and the boundary layer that turns loose
user values (CLI flags, JSON files) into a generator's typed params dataclass.

Generators trust their params: ranges are clamped here, never inside the
geometry code.
"""

import dataclasses
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

if TYPE_CHECKING:
    from .patterns import PatternDescriptor


@dataclass(frozen=True)
class Control:
    id: str
    label: str
    default: Any
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    kind: str = "range"     # "range", "checkbox" or "color"
    suffix: str = ""

    @property
    def integral(self) -> bool:
        return (
            self.kind == "range"
            and self.step is not None and float(self.step).is_integer()
            and self.min is not None and float(self.min).is_integer()
        )

    def coerce(self, value: Any) -> Any:
        """Clamp/cast a raw value to what this control accepts."""
        if self.kind == "checkbox":
            if isinstance(value, str):
                return value.strip().lower() in ("1", "true", "yes", "on")
            return bool(value)
        if self.kind == "color":
            return str(value)
        v = float(value)
        if self.min is not None:
            v = max(self.min, v)
        if self.max is not None:
            v = min(self.max, v)
        return int(round(v)) if self.integral else v


def range_control(id: str, label: str, min: float, max: float, step: float, default: Any,
                  suffix: str = "") -> Control:
    return Control(id=id, label=label, default=default, min=min, max=max, step=step, suffix=suffix)


def all_controls(descriptor: "PatternDescriptor"):
    return tuple(descriptor.controls) + tuple(descriptor.extra_controls)


def default_params(descriptor: "PatternDescriptor"):
    return descriptor.params_type()


def build_params(descriptor: "PatternDescriptor", values: Optional[Mapping[str, Any]] = None,
                 base: Any = None):
    """Params for ``descriptor`` with ``values`` coerced on top of ``base`` (or defaults).

    Unknown keys raise ``ValueError``.
    """
    params = base if base is not None else default_params(descriptor)
    if not values:
        return params
    controls = {c.id: c for c in all_controls(descriptor)}
    updates: Dict[str, Any] = {}
    for key, value in values.items():
        control = controls.get(key)
        if control is None:
            raise ValueError(
                f"Unknown parameter {key!r} for pattern {descriptor.key!r}. "
                f"Choose from {sorted(controls)}"
            )
        updates[key] = control.coerce(value)
    return dataclasses.replace(params, **updates)


def apply_preset(descriptor: "PatternDescriptor", params: Any, name: str):
    """Replace the preset's keys of ``params`` in one step."""
    preset = descriptor.presets.get(name)
    if preset is None:
        raise ValueError(f"Unknown preset {name!r}. Choose from {sorted(descriptor.presets)}")
    return dataclasses.replace(params, **preset)


def randomize_seed(params: Any, rng: Optional[random.Random] = None):
    """Copy of ``params`` with a fresh seed in [0, 9999)."""
    if not hasattr(params, "seed"):
        return params
    rng = rng or random.Random()
    return dataclasses.replace(params, seed=rng.randrange(9999))
