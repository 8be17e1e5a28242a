"""
Pattern registry.

Every generator module exposes a params dataclass, ``CONTROLS``, ``PRESETS``
and ``generate(params, style, field=None) -> Artwork``. ``PATTERNS`` maps the
pattern key to its descriptor; it is built once here and is read-only.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Tuple

import numpy as np

from ..controls import Control
from ..geometry import Artwork, Style
from . import depth_topo, dot_matrix, flow_field, hatch, network, topo, voronoi, wave

GenerateFn = Callable[[Any, Style, Optional[np.ndarray]], Artwork]


@dataclass(frozen=True)
class PatternDescriptor:
    key: str
    label: str
    generate: GenerateFn
    params_type: type
    controls: Tuple[Control, ...]
    presets: Mapping[str, Mapping[str, Any]]
    extra_controls: Tuple[Control, ...] = ()
    needs_field: bool = False


def _descriptor(key: str, label: str, module, params_type: type, **kw) -> PatternDescriptor:
    return PatternDescriptor(
        key=key,
        label=label,
        generate=module.generate,
        params_type=params_type,
        controls=tuple(module.CONTROLS),
        presets=MappingProxyType({k: MappingProxyType(v) for k, v in module.PRESETS.items()}),
        **kw,
    )


PATTERNS: Mapping[str, PatternDescriptor] = MappingProxyType({
    d.key: d for d in (
        _descriptor("flow", "Flow Field", flow_field, flow_field.FlowFieldParams),
        _descriptor("wave", "Wave", wave, wave.WaveParams),
        _descriptor("topo", "Topo", topo, topo.TopoParams),
        _descriptor("dots", "Dots", dot_matrix, dot_matrix.DotMatrixParams),
        _descriptor("net", "Network", network, network.NetworkParams),
        _descriptor("voronoi", "Voronoi", voronoi, voronoi.VoronoiParams),
        _descriptor("hatch", "Hatch", hatch, hatch.HatchParams),
        _descriptor("depthtopo", "Depth Topo", depth_topo, depth_topo.DepthTopoParams,
                    extra_controls=depth_topo.COLOR_CONTROLS, needs_field=True),
    )
})


def get_pattern(key: str) -> PatternDescriptor:
    descriptor = PATTERNS.get(key)
    if descriptor is None:
        raise ValueError(f"Unknown pattern: {key!r}. Choose from {list(PATTERNS)}")
    return descriptor


def generate(key: str, params: Any = None, style: Optional[Style] = None,
             field: Optional[np.ndarray] = None) -> Artwork:
    """Run the generator registered under ``key`` (defaults for missing params/style)."""
    descriptor = get_pattern(key)
    if params is None:
        params = descriptor.params_type()
    return descriptor.generate(params, style or Style(), field)
