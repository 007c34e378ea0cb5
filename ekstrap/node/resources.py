"""Per-instance-type resource limits.

Seed snapshot covering a subset of instance types, in the format written by
``ekstrap generate``. Run ``ekstrap generate`` to replace it with the full table.
"""

INSTANCE_CORES: dict[str, int | None] = {
    "c5.large": 2,
    "c5.xlarge": 4,
    "c5.2xlarge": 8,
    "c5.4xlarge": 16,
    "c5.9xlarge": 36,
    "c5.18xlarge": 72,
    "c5.metal": 96,
    "i3.large": 2,
    "i3.xlarge": 4,
    "i3.2xlarge": 8,
    "i3.4xlarge": 16,
    "i3.8xlarge": 32,
    "i3.16xlarge": 64,
    "i3.metal": 72,
    "m5.large": 2,
    "m5.xlarge": 4,
    "m5.2xlarge": 8,
    "m5.4xlarge": 16,
    "m5.8xlarge": 32,
    "m5.12xlarge": 48,
    "m5.16xlarge": 64,
    "m5.24xlarge": 96,
    "m5.metal": 96,
    "r5.large": 2,
    "r5.xlarge": 4,
    "r5.2xlarge": 8,
    "r5.4xlarge": 16,
    "t3.nano": 2,
    "t3.micro": 2,
    "t3.small": 2,
    "t3.medium": 2,
    "t3.large": 2,
    "t3.xlarge": 4,
    "t3.2xlarge": 8,
}

INSTANCE_MEMORY: dict[str, int | None] = {
    "c5.large": 4096,
    "c5.xlarge": 8192,
    "c5.2xlarge": 16384,
    "c5.4xlarge": 32768,
    "c5.9xlarge": 73728,
    "c5.18xlarge": 147456,
    "c5.metal": 196608,
    "i3.large": 15616,
    "i3.xlarge": 31232,
    "i3.2xlarge": 62464,
    "i3.4xlarge": 124928,
    "i3.8xlarge": 249856,
    "i3.16xlarge": 499712,
    "i3.metal": 524288,
    "m5.large": 8192,
    "m5.xlarge": 16384,
    "m5.2xlarge": 32768,
    "m5.4xlarge": 65536,
    "m5.8xlarge": 131072,
    "m5.12xlarge": 196608,
    "m5.16xlarge": 262144,
    "m5.24xlarge": 393216,
    "m5.metal": 393216,
    "r5.large": 16384,
    "r5.xlarge": 32768,
    "r5.2xlarge": 65536,
    "r5.4xlarge": 131072,
    "t3.nano": 512,
    "t3.micro": 1024,
    "t3.small": 2048,
    "t3.medium": 4096,
    "t3.large": 8192,
    "t3.xlarge": 16384,
    "t3.2xlarge": 32768,
}

INSTANCE_ENIS_AVAILABLE: dict[str, int | None] = {
    "c5.large": 3,
    "c5.xlarge": 4,
    "c5.2xlarge": 4,
    "c5.4xlarge": 8,
    "c5.9xlarge": 8,
    "c5.18xlarge": 15,
    "c5.metal": 15,
    "i3.large": 3,
    "i3.xlarge": 4,
    "i3.2xlarge": 4,
    "i3.4xlarge": 8,
    "i3.8xlarge": 8,
    "i3.16xlarge": 15,
    "i3.metal": 15,
    "m5.large": 3,
    "m5.xlarge": 4,
    "m5.2xlarge": 4,
    "m5.4xlarge": 8,
    "m5.8xlarge": 8,
    "m5.12xlarge": 8,
    "m5.16xlarge": 15,
    "m5.24xlarge": 15,
    "m5.metal": 15,
    "r5.large": 3,
    "r5.xlarge": 4,
    "r5.2xlarge": 4,
    "r5.4xlarge": 8,
    "t3.nano": 2,
    "t3.micro": 2,
    "t3.small": 3,
    "t3.medium": 3,
    "t3.large": 3,
    "t3.xlarge": 4,
    "t3.2xlarge": 4,
}

INSTANCE_IPS_AVAILABLE: dict[str, int | None] = {
    "c5.large": 10,
    "c5.xlarge": 15,
    "c5.2xlarge": 15,
    "c5.4xlarge": 30,
    "c5.9xlarge": 30,
    "c5.18xlarge": 50,
    "c5.metal": 50,
    "i3.large": 10,
    "i3.xlarge": 15,
    "i3.2xlarge": 15,
    "i3.4xlarge": 30,
    "i3.8xlarge": 30,
    "i3.16xlarge": 31,
    "i3.metal": 50,
    "m5.large": 10,
    "m5.xlarge": 15,
    "m5.2xlarge": 15,
    "m5.4xlarge": 30,
    "m5.8xlarge": 30,
    "m5.12xlarge": 30,
    "m5.16xlarge": 50,
    "m5.24xlarge": 50,
    "m5.metal": 50,
    "r5.large": 10,
    "r5.xlarge": 15,
    "r5.2xlarge": 15,
    "r5.4xlarge": 30,
    "t3.nano": 2,
    "t3.micro": 2,
    "t3.small": 4,
    "t3.medium": 6,
    "t3.large": 12,
    "t3.xlarge": 15,
    "t3.2xlarge": 15,
}
