"""
Tool descriptor types and parameter binding.

A descriptor declares its parameters in order. Binding an argument bag
against it yields an ordered list of (name, value) pairs, and command
tokens reference parameters by name rather than by position.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from vpp_mcp.modules.api import CliKind, InvalidParameter, MissingRequiredParameter

BoundParameters = List[Tuple[str, Any]]


@dataclass(frozen=True)
class ParameterSpec:
    """One declared tool parameter."""

    name: str
    description: str
    kind: str = "string"  # "string" or "integer"
    required: bool = False
    default: Any = None

    def to_schema(self) -> Dict[str, Any]:
        """JSON schema fragment for tools/list."""
        schema: Dict[str, Any] = {"type": self.kind, "description": self.description}
        if not self.required and self.default is not None:
            schema["default"] = self.default
        return schema


@dataclass(frozen=True)
class ToolDescriptor:
    """
    Immutable description of a tool.

    command holds the CLI arguments after the program name. A token of the
    form "{name}" is replaced by the bound value of parameter "name".
    """

    name: str
    title: str
    description: str
    cli: CliKind
    command: Tuple[str, ...] = ()
    parameters: Tuple[ParameterSpec, ...] = ()
    capture: Optional[str] = None

    @property
    def required_parameters(self) -> List[str]:
        return [p.name for p in self.parameters if p.required]

    @property
    def optional_parameters(self) -> Dict[str, Any]:
        return {p.name: p.default for p in self.parameters if not p.required}

    @property
    def is_capture(self) -> bool:
        return self.capture is not None

    @property
    def input_schema(self) -> Dict[str, Any]:
        """JSON schema advertised to MCP clients."""
        return {
            "type": "object",
            "properties": {p.name: p.to_schema() for p in self.parameters},
            "required": self.required_parameters,
        }

    def echo(self, tokens: List[str]) -> str:
        """Command line shown to the caller, e.g. 'vppctl show version'."""
        return " ".join([self.cli.value, *tokens])


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _coerce(descriptor: ToolDescriptor, spec: ParameterSpec, value: Any) -> Any:
    if spec.kind == "integer":
        if isinstance(value, bool):
            raise InvalidParameter(descriptor.name, spec.name, "expected an integer")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise InvalidParameter(
                descriptor.name, spec.name, f"expected an integer, got {value!r}"
            ) from None
    if isinstance(value, str):
        return value.strip()
    return str(value)


def bind_parameters(descriptor: ToolDescriptor, arguments: Mapping[str, Any]) -> BoundParameters:
    """
    Validate arguments against a descriptor.

    Parameters are checked in declaration order and the first missing
    required one aborts the call. Optional parameters fall back to their
    default. Unknown arguments are ignored.

    Raises:
        MissingRequiredParameter: A required parameter is absent or empty
        InvalidParameter: A value could not be coerced to its declared kind
    """
    bound: BoundParameters = []
    for spec in descriptor.parameters:
        value = arguments.get(spec.name)
        if _is_missing(value):
            if spec.required:
                raise MissingRequiredParameter(descriptor.name, spec.name, spec.description)
            bound.append((spec.name, spec.default))
            continue
        bound.append((spec.name, _coerce(descriptor, spec, value)))
    return bound


def render_command(descriptor: ToolDescriptor, bound: BoundParameters) -> List[str]:
    """
    Substitute bound values into the descriptor's command tokens.

    A substituted value containing whitespace becomes several CLI words.
    """
    values = dict(bound)
    tokens: List[str] = []
    for token in descriptor.command:
        if token.startswith("{") and token.endswith("}"):
            name = token[1:-1]
            if name not in values:
                raise KeyError(f"{descriptor.name}: command references undeclared parameter '{name}'")
            tokens.extend(str(values[name]).split())
        else:
            tokens.append(token)
    return tokens
