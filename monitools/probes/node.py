"""
Node description (capacity, allocatable resources, conditions) of the cluster.
"""

from monitools.config import OC_BIN
from monitools.models import BlobSample, SampleKind
from monitools.probes.base import BaseProbe


class NodeDescriptionProbe(BaseProbe):
    name = "node_description"
    kind = SampleKind.BLOB
    single_shot = True

    def observe(self) -> BlobSample:
        return BlobSample(self.run_command([OC_BIN, "get", "nodes", "-o", "json"], text=False))
