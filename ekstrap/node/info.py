"""EC2 instance metadata, tags and EKS cluster lookups for a worker node."""

from __future__ import annotations

import logging
import os
import re
import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import Any

import boto3
import requests

from ekstrap.constants import (
    CLUSTER_TAG_PATTERN,
    CONFIG_DIR_MODE,
    CONFIG_FILE_MODE,
    METADATA_TIMEOUT_SECONDS,
    METADATA_URL,
    NODE_LABEL_TAG_PATTERN,
    NODE_TAINT_TAG_PATTERN,
)
from ekstrap.exceptions import MetadataError
from ekstrap.utils import atomic_file_write, is_aws_region

logger = logging.getLogger(__name__)


class MetadataClient:
    """Minimal client for the EC2 instance metadata service.

    Parameters
    ----------
    base_url : str
        Metadata service root, without a trailing slash
    timeout : float
        Request timeout in seconds
    """

    def __init__(self, base_url: str = METADATA_URL, timeout: float = METADATA_TIMEOUT_SECONDS) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def get(self, name: str) -> str:
        """Read a metadata item.

        Parameters
        ----------
        name : str
            Item path (e.g., "instance-id", "placement/availability-zone")

        Returns
        -------
        str
            Item value

        Raises
        ------
        MetadataError
            If the metadata service is unreachable or returns an error
        """
        url = f"{self.base_url}/{name}"

        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise MetadataError(f"Failed to read instance metadata {name}: {e}", url) from e

        if not response.ok:
            raise MetadataError(
                f"Failed to read instance metadata {name}: HTTP {response.status_code}",
                url,
                status_code=response.status_code,
            )

        return response.text


class NodeInfo:
    """Properties of the EC2 instance this process runs on.

    Parameters
    ----------
    metadata_client : MetadataClient | None
        Metadata reader. If None, uses a MetadataClient with default settings
    boto3_resource_factory : Callable[..., Any] | None
        Optional factory for creating boto3 resources. If None, uses boto3.resource
    command_runner : Callable[..., subprocess.CompletedProcess] | None
        Optional replacement for subprocess.run used to call the aws CLI
    """

    def __init__(
        self,
        metadata_client: MetadataClient | None = None,
        boto3_resource_factory: Callable[..., Any] | None = None,
        command_runner: Callable[..., subprocess.CompletedProcess] | None = None,
    ) -> None:
        self.metadata_client = metadata_client or MetadataClient()
        self.boto3_resource_factory = boto3_resource_factory or boto3.resource
        self.command_runner = command_runner or subprocess.run
        self._instance: Any = None

    def metadata(self, name: str) -> str:
        return self.metadata_client.get(name)

    @property
    def instance_id(self) -> str:
        return self.metadata("instance-id")

    @property
    def node_ip(self) -> str:
        return self.metadata("local-ipv4")

    @property
    def availability_zone(self) -> str:
        return self.metadata("placement/availability-zone")

    @property
    def region(self) -> str:
        """Region derived from the availability zone.

        Raises
        ------
        ValueError
            If the derived value does not look like an AWS region, which
            usually means the process is not running on EC2
        """
        region = self.availability_zone[:-1]

        if not is_aws_region(region):
            raise ValueError(
                f"Region '{region}' derived from instance metadata does not look like "
                "an AWS region. Is this running on an EC2 instance?"
            )

        return region

    @property
    def instance(self) -> Any:
        """The boto3 ec2.Instance for this node, created on first access."""
        if self._instance is None:
            ec2 = self.boto3_resource_factory("ec2", region_name=self.region)
            self._instance = ec2.Instance(self.instance_id)

        return self._instance

    @property
    def tags(self) -> dict[str, str]:
        return {tag["Key"]: tag["Value"] for tag in self.instance.tags or []}

    @property
    def cluster_name(self) -> str:
        """Cluster name taken from the ``kubernetes.io/cluster/<name>`` tag.

        Raises
        ------
        ValueError
            If no tag matches
        """
        for key in self.tags:
            match = re.search(CLUSTER_TAG_PATTERN, key)

            if match:
                return match.group(1)

        raise ValueError(f"Could not determine cluster name from: {CLUSTER_TAG_PATTERN}")

    def value_from_tag(self, key: str) -> str | None:
        return self.tags.get(key)

    def value_from_tag_strict(self, key: str) -> str:
        """Return a tag value, raising KeyError if the tag is missing."""
        value = self.value_from_tag(key)

        if value is None:
            raise KeyError(f"Tag: {key} not found")

        return value

    @property
    def role(self) -> str:
        return self.value_from_tag_strict("Role")

    @property
    def name_tag(self) -> str:
        return "-".join([self.role, self.cluster_name, self.instance_id])

    def eks_describe_cluster(self, query: str) -> str:
        """Query the node's EKS cluster through the aws CLI.

        Parameters
        ----------
        query : str
            JMESPath query applied to the describe-cluster output
            (e.g., "cluster.endpoint")

        Returns
        -------
        str
            Query result as plain text

        Raises
        ------
        RuntimeError
            If the aws CLI is missing or exits with an error
        """
        command = [
            "aws",
            "eks",
            "describe-cluster",
            "--profile=empty",
            f"--region={self.region}",
            f"--cluster-name={self.cluster_name}",
            "--query",
            query,
            "--output",
            "text",
        ]
        logger.debug("Running %s", " ".join(command))

        try:
            result = self.command_runner(command, capture_output=True, text=True, check=False)
        except FileNotFoundError as e:
            raise RuntimeError("aws CLI not found in PATH") from e

        if result.returncode != 0:
            raise RuntimeError(
                f"aws eks describe-cluster failed with exit code {result.returncode}: "
                f"{result.stderr.strip()}"
            )

        return result.stdout.strip()

    @property
    def eks_endpoint(self) -> str:
        return self.eks_describe_cluster("cluster.endpoint")

    @property
    def eks_certificate_authority(self) -> str:
        return self.eks_describe_cluster("cluster.certificateAuthority.data")

    @property
    def spot(self) -> bool:
        return self.instance.instance_lifecycle == "spot"

    @property
    def labels(self) -> list[str]:
        """Kubernetes labels for this node, sorted.

        Spot instances get ``node-role.kubernetes.io/spot-worker``, others
        ``node-role.kubernetes.io/worker``. Further labels come from tags with
        the ``k8s.io/cluster-autoscaler/node-template/label/`` prefix.
        """
        if self.spot:
            labels = {"node-role.kubernetes.io/spot-worker": "true"}
        else:
            labels = {"node-role.kubernetes.io/worker": "true"}

        for key, value in self.tags.items():
            match = re.search(NODE_LABEL_TAG_PATTERN, key)

            if match:
                labels[match.group(1)] = value

        return sorted(f"{key}={value}" for key, value in labels.items())

    @property
    def taints(self) -> list[str]:
        """Kubernetes taints from ``k8s.io/cluster-autoscaler/node-template/taint/`` tags."""
        taints = []

        for key, value in self.tags.items():
            match = re.search(NODE_TAINT_TAG_PATTERN, key)

            if match:
                taints.append(f"{match.group(1)}={value}")

        return sorted(taints)

    @property
    def cluster_dns(self) -> str:
        """In-cluster address kube-dns is expected at."""
        private_ip = self.instance.private_ip_address or ""

        if private_ip.startswith("10."):
            return "172.20.0.10"

        return "10.100.0.10"


def validate_running_as_root() -> None:
    """Raise PermissionError unless the effective user is root."""
    if os.geteuid() != 0:
        raise PermissionError("This script must be run as root!")


def needs_updating(path: Path | str, data: str) -> bool:
    """Check whether a file is missing or holds different content.

    Parameters
    ----------
    path : Path | str
        File to compare
    data : str
        Desired content

    Returns
    -------
    bool
        True if the file does not exist or its content differs
    """
    try:
        return Path(path).read_text() != data
    except FileNotFoundError:
        return True


def write_config(
    path: Path | str, data: str, on_change: Callable[[], None] | None = None
) -> bool:
    """Write a config file if its content changed.

    Parameters
    ----------
    path : Path | str
        Destination file
    data : str
        File content
    on_change : Callable[[], None] | None
        Called after the file has been written

    Returns
    -------
    bool
        True if the file was written
    """
    path = Path(path)
    path.parent.mkdir(mode=CONFIG_DIR_MODE, parents=True, exist_ok=True)

    if not needs_updating(path, data):
        return False

    atomic_file_write(path, data, mode=CONFIG_FILE_MODE)
    logger.info("Updated %s", path)

    if on_change is not None:
        on_change()

    return True
