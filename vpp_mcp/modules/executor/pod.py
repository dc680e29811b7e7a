"""
kubectl command assembly for dataplane pods.

Builds the argument vectors for 'kubectl exec' into the VPP and agent
containers and for listing the dataplane pods, then hands them to a
ProcessRunner.
"""

from typing import List, Optional, Sequence

from vpp_mcp.config import DataplaneConfig
from vpp_mcp.modules.api import CliKind, CommandResult

from .runner import ProcessRunner


class PodExec:
    """Runs vppctl and gobgp inside dataplane pods through kubectl."""

    def __init__(self, runner: ProcessRunner, dataplane: DataplaneConfig, timeout: float):
        self.runner = runner
        self.dataplane = dataplane
        self.timeout = timeout

    def default_container(self, cli: CliKind) -> str:
        """Container that ships the given CLI."""
        if cli == CliKind.GOBGP:
            return self.dataplane.agent_container
        return self.dataplane.vpp_container

    def exec_args(
        self,
        pod: str,
        cli: CliKind,
        tokens: Sequence[str],
        namespace: Optional[str] = None,
        container: Optional[str] = None,
    ) -> List[str]:
        """Arguments after the kubectl binary for one in-pod command."""
        return [
            "exec",
            "-n",
            namespace or self.dataplane.namespace,
            pod,
            "-c",
            container or self.default_container(cli),
            "--",
            cli.value,
            *tokens,
        ]

    async def exec(
        self,
        pod: str,
        cli: CliKind,
        tokens: Sequence[str],
        *,
        namespace: Optional[str] = None,
        container: Optional[str] = None,
    ) -> CommandResult:
        """Run a CLI command inside a pod."""
        return await self.runner.run(
            self.dataplane.kubectl_binary,
            self.exec_args(pod, cli, tokens, namespace, container),
            timeout=self.timeout,
            target=pod,
        )

    async def vppctl(
        self,
        pod: str,
        tokens: Sequence[str],
        *,
        namespace: Optional[str] = None,
        container: Optional[str] = None,
    ) -> CommandResult:
        return await self.exec(pod, CliKind.VPPCTL, tokens, namespace=namespace, container=container)

    async def get_pods(self, namespace: Optional[str] = None) -> CommandResult:
        """List dataplane pods with their node and IP."""
        return await self.runner.run(
            self.dataplane.kubectl_binary,
            ["get", "pods", "-n", namespace or self.dataplane.namespace, "-owide"],
            timeout=self.timeout,
        )
