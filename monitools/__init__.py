"""
monitools - resource monitoring for a CodeReady Containers (CRC) host.

Samples CPU load of the hypervisor process, traffic on the VM interface,
CRI-O container stats and the node description while the cluster is running,
or records cluster start latency over repeated start/delete cycles. Every
metric stream is written to its own JSON file for later analysis.
"""

VERSION = "0.2.0"
__version__ = VERSION
