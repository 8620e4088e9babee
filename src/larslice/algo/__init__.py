"""Algorithms and algorithm tools dispatched by the reconstruction.

**Interfaces:**
- `AlgorithmBase`: daughter algorithm, `run(store) -> StatusCode`
- `ClusteringBase`: forms clusters from the current hit collection
- `SlicingToolBase`: partitions an event into slices

**Built-in implementations:**
- `ProximityClustering`: connected components of nearby hits
- `OneSliceTool`, `DriftSlicingTool`: slicing tools
- `ListDeletionAlgorithm`, `ListMovingAlgorithm`: collection management
- `ClusterSizeFilter`, `ListDumpAlgorithm`: simple daughter algorithms

Custom classes are made available to the configuration with the
`register_algorithm` and `register_tool` decorators.

**Example Configuration:**
```yaml
parent:
  two_d_clustering:
    name: proximity
    max_distance: 1.5
  slicing: drift
  two_d_algorithms:
    - name: cluster_size_filter
      min_size: 3
```
"""

from .base import AlgorithmBase, AlgorithmToolBase, ClusteringBase, SlicingToolBase
from .factories import algorithm_factory, register_algorithm, register_tool, tool_factory
