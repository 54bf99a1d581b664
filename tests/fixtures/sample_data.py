"""
Sample command output for testing probes without a CRC host.
"""

import json

SAMPLE_CRC_STATUS_RUNNING = json.dumps({
    "success": True,
    "crcStatus": "Running",
    "openshiftStatus": "Running",
    "openshiftVersion": "4.14.8",
    "diskUsage": 21452423168,
    "diskSize": 32737570816,
    "cacheUsage": 22341926348,
    "cacheDir": "/home/user/.crc/cache",
})

SAMPLE_CRC_STATUS_STOPPED = json.dumps({
    "success": True,
    "crcStatus": "Stopped",
    "openshiftStatus": "Stopped",
    "cacheDir": "/home/user/.crc/cache",
})

# net-tools 2.x, RX 3 MiB / TX 1 MiB
SAMPLE_IFCONFIG_NEW = """crc: flags=4163<UP,BROADCAST,RUNNING,MULTICAST>  mtu 1500
        inet 192.168.130.1  netmask 255.255.255.0  broadcast 192.168.130.255
        ether 52:54:00:fd:be:d0  txqueuelen 1000  (Ethernet)
        RX packets 445662  bytes 3145728 (3.0 MiB)
        RX errors 0  dropped 0  overruns 0  frame 0
        TX packets 512933  bytes 1048576 (1.0 MiB)
        TX errors 0  dropped 0 overruns 0  carrier 0  collisions 0
"""

# net-tools 1.x, RX 5 MiB / TX 2 MiB
SAMPLE_IFCONFIG_OLD = """crc       Link encap:Ethernet  HWaddr 52:54:00:FD:BE:D0
          inet addr:192.168.130.1  Bcast:192.168.130.255  Mask:255.255.255.0
          UP BROADCAST RUNNING MULTICAST  MTU:1500  Metric:1
          RX packets:445662 errors:0 dropped:0 overruns:0 frame:0
          TX packets:512933 errors:0 dropped:0 overruns:0 carrier:0
          collisions:0 txqueuelen:1000
          RX bytes:5242880 (5.0 MiB)  TX bytes:2097152 (2.0 MiB)
"""

# crc interface: RX 10 MiB / TX 4 MiB
SAMPLE_PROC_NET_DEV = """Inter-|   Receive                                                |  Transmit
 face |bytes    packets errs drop fifo frame compressed multicast|bytes    packets errs drop fifo colls carrier compressed
    lo:   12345     100    0    0    0     0          0         0    12345     100    0    0    0     0       0          0
   crc: 10485760   2000    0    0    0     0          0         0  4194304    1500    0    0    0     0       0          0
"""

SAMPLE_CRICTL_STATS = json.dumps({
    "stats": [
        {
            "attributes": {
                "id": "0a1b2c3d4e5f",
                "metadata": {"name": "etcd", "uid": "a1b2", "namespace": "openshift-etcd", "attempt": 0},
            },
            "cpu": {"timestamp": "1700000000000000000", "usageCoreNanoSeconds": {"value": "123456789"}},
            "memory": {"timestamp": "1700000000000000000", "workingSetBytes": {"value": "104857600"}},
        }
    ]
}, indent=2).encode()

SAMPLE_NODES = json.dumps({
    "apiVersion": "v1",
    "kind": "List",
    "items": [
        {
            "kind": "Node",
            "metadata": {"name": "crc-8tnb7-master-0"},
            "status": {
                "capacity": {"cpu": "4", "memory": "9951748Ki"},
                "allocatable": {"cpu": "3500m", "memory": "9342468Ki"},
            },
        }
    ],
}, indent=2).encode()
