"""Default configuration for quality-measures."""

from typing import Any

from ..core.metric import CoreMetrics

# Looked up in the current directory when --config is not given
DEFAULT_CONFIG_FILENAME = "quality-measures.yaml"

# Built-in metric definitions, in evaluation order:
#   ncloc                          raw COUNT, supplied upstream, not summed
#   comment_lines                  COUNT, summed bottom-up
#   comment_lines_density          comment_lines / (ncloc + comment_lines)
#   public_api                     COUNT, summed bottom-up
#   public_undocumented_api        COUNT, summed bottom-up
#   public_documented_api_density  (public_api - undocumented) / public_api
DEFAULT_METRICS: list[dict[str, Any]] = [
    metric.to_dict() for metric in CoreMetrics.all()
]
