"""
Inventory Module - Black Box Interface

Purpose: Live lookups against the cluster control plane
Interface: ClusterInventory protocol, KubeInventory, TargetResolver
Hidden: Kubernetes client configuration, API calls, thread offloading

Used only for validation and configuration reads, never cached.
"""

from .cluster import ClusterInventory, KubeInventory, TargetResolver

__all__ = ["ClusterInventory", "KubeInventory", "TargetResolver"]
