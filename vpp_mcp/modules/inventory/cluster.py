"""
Cluster inventory and target resolution.

Node names and dataplane configuration are read live from the Kubernetes
API on every call. Nothing is cached, so results follow cluster membership
changes between calls.
"""

import asyncio
import logging
from typing import List, Optional, Protocol

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException
from urllib3.exceptions import HTTPError

from vpp_mcp.modules.api import ClusterQueryFailure, ClusterTarget, TargetNotFound

logger = logging.getLogger("vpp_mcp.inventory")


class ClusterInventory(Protocol):
    """Protocol for live cluster lookups."""

    async def list_node_names(self) -> List[str]:
        """Return the names of all nodes in the cluster."""
        ...

    async def read_config_map_value(self, namespace: str, name: str, key: str) -> str:
        """Return one data entry of a ConfigMap."""
        ...


class KubeInventory:
    """ClusterInventory backed by the official Kubernetes client."""

    def __init__(self, timeout: float = 30.0, kubeconfig: Optional[str] = None):
        """
        Initialize the inventory.

        Args:
            timeout: Request timeout for API calls in seconds
            kubeconfig: Explicit kubeconfig path; in-cluster config and the
                default kubeconfig are tried when omitted
        """
        self.timeout = timeout
        self.kubeconfig = kubeconfig
        self._api: Optional[client.CoreV1Api] = None

    def _core_api(self) -> client.CoreV1Api:
        """Load client configuration on first use."""
        if self._api is None:
            try:
                if self.kubeconfig:
                    config.load_kube_config(config_file=self.kubeconfig)
                else:
                    try:
                        config.load_incluster_config()
                    except ConfigException:
                        config.load_kube_config()
            except ConfigException as e:
                raise ClusterQueryFailure(
                    f"Error: Failed to create Kubernetes client: {e}"
                ) from e
            self._api = client.CoreV1Api()
            logger.info("Kubernetes client configuration loaded")
        return self._api

    def _list_node_names(self) -> List[str]:
        nodes = self._core_api().list_node(_request_timeout=self.timeout)
        return [node.metadata.name for node in nodes.items]

    def _read_config_map(self, namespace: str, name: str):
        return self._core_api().read_namespaced_config_map(
            name, namespace, _request_timeout=self.timeout
        )

    async def list_node_names(self) -> List[str]:
        """Return the names of all nodes in the cluster."""
        try:
            return await asyncio.to_thread(self._list_node_names)
        except ApiException as e:
            raise ClusterQueryFailure(f"Error listing cluster nodes: {e.reason}") from e
        except HTTPError as e:
            raise ClusterQueryFailure(f"Error listing cluster nodes: {e}") from e

    async def read_config_map_value(self, namespace: str, name: str, key: str) -> str:
        """Return one data entry of a ConfigMap."""
        try:
            config_map = await asyncio.to_thread(self._read_config_map, namespace, name)
        except ApiException as e:
            raise ClusterQueryFailure(
                f"failed to get {name} ConfigMap: {e.reason}"
            ) from e
        except HTTPError as e:
            raise ClusterQueryFailure(f"failed to get {name} ConfigMap: {e}") from e

        data = config_map.data or {}
        if key not in data:
            raise ClusterQueryFailure(f"{key} not found in ConfigMap")
        return data[key]


class TargetResolver:
    """Validates caller-supplied targets against the live inventory."""

    def __init__(self, inventory: ClusterInventory, logger: Optional[logging.Logger] = None):
        self.inventory = inventory
        self.logger = logger or logging.getLogger("vpp_mcp.inventory")

    async def validate(self, node_hint: str = "") -> str:
        """
        Validate a node name against the cluster.

        Matching is exact. With an empty hint and a single-node cluster the
        only node is selected.

        Args:
            node_hint: Node name supplied by the caller (may be empty)

        Returns:
            The resolved node name

        Raises:
            TargetNotFound: The hint matched no node
            ClusterQueryFailure: The inventory could not be queried
        """
        node_names = await self.inventory.list_node_names()

        if not node_names:
            raise ClusterQueryFailure("Error validating node: no nodes found. Is cluster running?")

        if not node_hint and len(node_names) == 1:
            self.logger.debug(f"Auto-selected node {node_names[0]}")
            return node_names[0]

        if node_hint in node_names:
            return node_hint

        self.logger.warning(f"Node '{node_hint}' not found among {len(node_names)} nodes")
        raise TargetNotFound(node_hint, node_names)

    async def resolve(self, pod_name: str, node_hint: str = "") -> ClusterTarget:
        """Build a ClusterTarget, validating the node only when one is given."""
        host_node = await self.validate(node_hint) if node_hint else None
        return ClusterTarget(identifier=pod_name, host_node=host_node)
