"""
Read-only view over a loaded AsyncAPI document.

The generator never edits the document: every accessor returns plain
values or read-only mappings built from the underlying dictionary.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from .errors import DocumentError

logger = logging.getLogger(__name__)

SCHEMA_REF_PREFIX = "#/components/schemas/"
MESSAGE_REF_PREFIX = "#/components/messages/"


@dataclass(frozen=True)
class Server:
    """A server entry of the document."""

    name: str
    url: str = ""
    protocol: str = ""
    protocol_version: str = ""
    description: str = ""
    security: tuple[str, ...] = ()


@dataclass(frozen=True)
class SecurityScheme:
    """A security scheme declared under components.securitySchemes."""

    name: str
    type: str = ""
    description: str = ""


@dataclass(frozen=True)
class Operation:
    """A publish or subscribe operation of a channel."""

    operation_id: str = ""
    summary: str = ""
    messages: tuple[str, ...] = ()
    payloads: tuple[str, ...] = ()


@dataclass(frozen=True)
class Channel:
    """A channel and its operations."""

    name: str
    description: str = ""
    publish: Operation | None = None
    subscribe: Operation | None = None
    parameters: tuple[str, ...] = field(default_factory=tuple)


def _ref_name(ref: str, prefix: str) -> str:
    if ref.startswith(prefix):
        return ref[len(prefix) :]
    return ref.rsplit("/", 1)[-1]


class AsyncApiDocument:
    """Read-only accessors over an AsyncAPI mapping."""

    def __init__(self, raw: Mapping[str, Any]):
        if not isinstance(raw, Mapping):
            raise DocumentError(f"AsyncAPI document must be a mapping, got {type(raw).__name__}")
        self._raw = raw

    @classmethod
    def load(cls, path: str | Path) -> AsyncApiDocument:
        """Load a document from a .json, .yaml or .yml file."""
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                raw = json.load(f)
            else:
                raw = yaml.safe_load(f)
        logger.debug("Loaded AsyncAPI document from %s", path)
        return cls(raw)

    @classmethod
    def from_string(cls, text: str) -> AsyncApiDocument:
        """Parse a document from YAML (or JSON, which is a subset of YAML) text."""
        return cls(yaml.safe_load(text))

    @property
    def raw(self) -> Mapping[str, Any]:
        return MappingProxyType(self._raw)

    @property
    def asyncapi_version(self) -> str:
        return str(self._raw.get("asyncapi", ""))

    @property
    def title(self) -> str:
        return str(self._info().get("title", ""))

    @property
    def version(self) -> str:
        return str(self._info().get("version", ""))

    @property
    def description(self) -> str:
        return str(self._info().get("description", ""))

    def _info(self) -> Mapping[str, Any]:
        info = self._raw.get("info") or {}
        if not isinstance(info, Mapping):
            raise DocumentError("'info' must be a mapping")
        return info

    def _section(self, *keys: str) -> Mapping[str, Any]:
        node: Any = self._raw
        for depth, key in enumerate(keys):
            if not isinstance(node, Mapping):
                raise DocumentError(f"'{'.'.join(keys[:depth])}' must be a mapping, got {type(node).__name__}")
            node = node.get(key)
            if node is None:
                return MappingProxyType({})
        if not isinstance(node, Mapping):
            raise DocumentError(f"'{'.'.join(keys)}' must be a mapping, got {type(node).__name__}")
        return MappingProxyType(node)

    def schemas(self) -> Mapping[str, Mapping[str, Any]]:
        """Schema components in document order."""
        schemas = self._section("components", "schemas")
        for name, schema in schemas.items():
            if not isinstance(schema, Mapping):
                raise DocumentError(f"Schema component '{name}' must be a mapping")
        return schemas

    def servers(self) -> dict[str, Server]:
        servers = {}
        for name, server in self._section("servers").items():
            if not isinstance(server, Mapping):
                raise DocumentError(f"Server '{name}' must be a mapping")
            security = []
            for requirement in server.get("security") or []:
                security.extend(requirement.keys())
            servers[name] = Server(
                name=name,
                url=str(server.get("url", "")),
                protocol=str(server.get("protocol", "")),
                protocol_version=str(server.get("protocolVersion", "")),
                description=str(server.get("description", "")),
                security=tuple(security),
            )
        return servers

    def server(self, name: str) -> Server:
        servers = self.servers()
        if name not in servers:
            known = ", ".join(servers) or "none"
            raise DocumentError(f"Unknown server '{name}' (known servers: {known})")
        return servers[name]

    def security_schemes(self) -> dict[str, SecurityScheme]:
        schemes = {}
        for name, scheme in self._section("components", "securitySchemes").items():
            schemes[name] = SecurityScheme(
                name=name,
                type=str(scheme.get("type", "")),
                description=str(scheme.get("description", "")),
            )
        return schemes

    def server_security_schemes(self, server_name: str) -> list[SecurityScheme]:
        """Security schemes required by a server, in the server's order."""
        server = self.server(server_name)
        schemes = self.security_schemes()
        missing = [name for name in server.security if name not in schemes]
        if missing:
            raise DocumentError(f"Server '{server_name}' requires undeclared security schemes: {', '.join(missing)}")
        return [schemes[name] for name in server.security]

    def channels(self) -> dict[str, Channel]:
        channels = {}
        for name, channel in self._section("channels").items():
            if not isinstance(channel, Mapping):
                raise DocumentError(f"Channel '{name}' must be a mapping")
            channels[name] = Channel(
                name=name,
                description=str(channel.get("description", "")),
                publish=self._operation(channel.get("publish")),
                subscribe=self._operation(channel.get("subscribe")),
                parameters=tuple((channel.get("parameters") or {}).keys()),
            )
        return channels

    def _operation(self, operation: Mapping[str, Any] | None) -> Operation | None:
        if operation is None:
            return None
        message = operation.get("message") or {}
        candidates = message.get("oneOf") if "oneOf" in message else [message]
        messages = []
        payloads = []
        for candidate in candidates:
            if "$ref" in candidate:
                message_name = _ref_name(candidate["$ref"], MESSAGE_REF_PREFIX)
                messages.append(message_name)
                candidate = self._section("components", "messages").get(message_name, {})
            elif candidate.get("name"):
                messages.append(str(candidate["name"]))
            payload = candidate.get("payload") or {}
            if "$ref" in payload:
                payloads.append(_ref_name(payload["$ref"], SCHEMA_REF_PREFIX))
        return Operation(
            operation_id=str(operation.get("operationId", "")),
            summary=str(operation.get("summary", "")),
            messages=tuple(messages),
            payloads=tuple(payloads),
        )
