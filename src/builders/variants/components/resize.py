"""Clone-and-scale step for one target size."""

from __future__ import annotations

from src.builders.variants.context import BuildContext
from src.builders.variants.diagnostics import Severity, emit_simple
from src.builders.variants.errors import VariantBuildError
from src.builders.variants.geom_utils import reference_dimension, scale_factor
from src.builders.variants.scene_types import HostScene, SceneNode


def resize_icon(
    host: HostScene,
    source: SceneNode,
    target_size: float,
    ctx: BuildContext | None = None,
):
    """Return a clone of ``source`` scaled so its larger side equals ``target_size``.

    The source node is never touched. If the clone cannot be rescaled it is
    returned at source size.
    """
    reference = reference_dimension(source.width, source.height)
    if reference <= 0.0:
        raise VariantBuildError(source.name, f"source '{source.name}' has zero size")
    factor = scale_factor(target_size, reference)

    cloned = host.clone(source)
    if cloned.can_rescale:
        cloned.rescale(factor)
    elif ctx is not None:
        emit_simple(
            ctx.diag,
            run_id=ctx.run_id,
            stage="build",
            component="resizer",
            code="CAPABILITY_SKIPPED",
            severity=Severity.WARN,
            path=f"{source.name}.rescale",
            source="host",
            input_value={"target_size": float(target_size), "factor": factor},
            resolved_value={"width": float(cloned.width), "height": float(cloned.height)},
            reason=f"{cloned.kind.value} node does not support rescale; kept source size",
        )
    return cloned
