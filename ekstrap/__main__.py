#!/usr/bin/env python3
"""ekstrap - EC2 instance capability tables and EKS worker node helpers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ekstrap.cli.main import main
from ekstrap.core.config import ConfigLoader
from ekstrap.node.capacity import max_pods, reserved_cpu, reserved_memory
from ekstrap.node.info import MetadataClient, NodeInfo
from ekstrap.resources.builder import generate


class Ekstrap:
    """Command line interface for ekstrap."""

    def __init__(self, node_info_factory: Callable[[dict[str, Any]], NodeInfo] | None = None) -> None:
        """Initialize ekstrap with optional dependency injection."""
        self._config_loader = ConfigLoader()
        self._node_info_factory = node_info_factory or self._create_node_info

    def _settings(self, config: str | None = None) -> dict[str, Any]:
        loaded = self._config_loader.load_config(config)
        self._config_loader.validate_config(loaded)
        return self._config_loader.get_settings(loaded)

    @staticmethod
    def _create_node_info(settings: dict[str, Any]) -> NodeInfo:
        return NodeInfo(
            metadata_client=MetadataClient(
                base_url=settings["metadata_url"],
                timeout=settings["metadata_timeout"],
            )
        )

    def generate(self, output: str | None = None, config: str | None = None) -> str:
        """Regenerate the instance capability table module.

        Parameters
        ----------
        output : str | None
            Destination file, overriding the configured output_path
        config : str | None
            YAML config file, overriding EKSTRAP_CONFIG

        Returns
        -------
        str
            Summary of what was written
        """
        settings = self._settings(config)

        if output is not None:
            settings["output_path"] = output

        tables = generate(settings)
        return f"Wrote {len(tables)} instance types to {settings['output_path']}"

    def capacity(self, instance_type: str) -> dict[str, Any]:
        """Show pod capacity and kube-reserved values for an instance type."""
        return {
            "instance_type": instance_type,
            "max_pods": max_pods(instance_type),
            "reserved_cpu": reserved_cpu(instance_type),
            "reserved_memory": reserved_memory(instance_type),
        }

    def node(self, config: str | None = None) -> dict[str, Any]:
        """Describe the EC2 instance this command runs on.

        Reads instance metadata and tags, and resolves the EKS endpoint
        through the aws CLI.
        """
        info = self._node_info_factory(self._settings(config))
        instance_type = info.metadata("instance-type")

        return {
            "instance_id": info.instance_id,
            "instance_type": instance_type,
            "region": info.region,
            "node_ip": info.node_ip,
            "cluster_name": info.cluster_name,
            "cluster_endpoint": info.eks_endpoint,
            "cluster_dns": info.cluster_dns,
            "spot": info.spot,
            "labels": info.labels,
            "taints": info.taints,
            **self.capacity(instance_type),
        }


if __name__ == "__main__":
    main()
