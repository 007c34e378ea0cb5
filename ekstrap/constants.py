"""Global constants for ekstrap.

This module holds the source locations, manual corrections and node-level
constants shared by the table builder and the node helpers.
"""

ENI_TABLE_URL = "https://docs.aws.amazon.com/AWSEC2/latest/UserGuide/using-eni.partial.html"
"""Documentation page carrying the per-instance-type ENI and IP limits table."""

ENI_TABLE_SELECTOR = ".table-contents table"
"""CSS selector matching the ENI/IP limits table inside the documentation page."""

PRICING_URL = (
    "https://pricing.us-east-1.amazonaws.com/offers/v1.0/aws/AmazonEC2/current/us-east-1/index.json"
)
"""EC2 price list offer file used for vCPU and memory attributes."""

REQUEST_TIMEOUT_SECONDS = 120
"""Timeout in seconds for fetching either source document.

The pricing offer file is several hundred megabytes, so the timeout is
generous. A timeout aborts the run; nothing is retried.
"""

DEFAULT_OUTPUT_PATH = "ekstrap/node/resources.py"
"""Location of the generated capability table module, relative to the repo root."""

COMPUTE_INSTANCE_FAMILY = "Compute Instance"
"""Pricing productFamily whose instanceType maps directly onto a type_id."""

DEDICATED_HOST_FAMILY = "Dedicated Host"
"""Pricing productFamily whose instanceType maps onto ``<instanceType>.metal``."""

METAL_SUFFIX = ".metal"

MAX_USABLE_IPS_PER_ENI = 31

IP_PER_ENI_OVERRIDES = {
    "f1.16xlarge": MAX_USABLE_IPS_PER_ENI,
    "g3.16xlarge": MAX_USABLE_IPS_PER_ENI,
    "h1.16xlarge": MAX_USABLE_IPS_PER_ENI,
    "i3.16xlarge": MAX_USABLE_IPS_PER_ENI,
    "r4.16xlarge": MAX_USABLE_IPS_PER_ENI,
}
"""Forced IPv4-per-ENI counts.

If f1.16xlarge, g3.16xlarge, h1.16xlarge, i3.16xlarge and r4.16xlarge
instances use more than 31 IPv4 or IPv6 addresses per interface, they cannot
access the instance metadata, VPC DNS and Time Sync services from the 32nd
address onwards.
"""

MEMORY_OVERRIDES_MIB = {
    "a1.metal": 32 * 1024,
    "i3.metal": 512 * 1024,
    "i3en.metal": 768 * 1024,
    "r5.metal": 768 * 1024,
    "m5.metal": 384 * 1024,
    "c5.metal": 192 * 1024,
    "r5d.metal": 768 * 1024,
    "c5n.metal": 192 * 1024,
    "c5d.metal": 192 * 1024,
    "m5d.metal": 384 * 1024,
    "z1d.metal": 384 * 1024,
    "u-6tb1.metal": 6291456,
    "u-9tb1.metal": 9437184,
    "u-12tb1.metal": 12582912,
    "u-18tb1.metal": 18874368,
    "u-24tb1.metal": 25165824,
}
"""Forced memory sizes in MiB for metal instances the price list misreports."""

METADATA_URL = "http://169.254.169.254/latest/meta-data"
"""Base URL of the EC2 instance metadata service."""

METADATA_TIMEOUT_SECONDS = 2

CLUSTER_TAG_PATTERN = r"kubernetes.io/cluster/([\w-]+)"

NODE_LABEL_TAG_PATTERN = r"k8s.io/cluster-autoscaler/node-template/label/(.*)"

NODE_TAINT_TAG_PATTERN = r"k8s.io/cluster-autoscaler/node-template/taint/(.*)"

AWS_REGION_PATTERN = r"^[a-z\-]{2,6}-[a-z]{4,9}-\d$"
"""Rough shape of an AWS region name.

Only a sanity check: a match does not guarantee the region exists.
"""

CONFIG_DIR_MODE = 0o710

CONFIG_FILE_MODE = 0o640

EXIT_SUCCESS = 0

EXIT_ERROR = 1
"""Exit code for fetch, parse and other runtime failures."""

EXIT_CONFIG_ERROR = 2
"""Exit code for invalid configuration."""
