# Copyright (c) 2025 ByteDance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""Base classes shared by the MCP tools."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

ParamSchemaValue = str | list[str] | bool | dict[str, Any]
ToolCallArguments = dict[str, Any]


class ToolError(Exception):
    """Raised by a tool when a call cannot be completed."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message: str = message


@dataclass
class ToolExecResult:
    """Intermediate result of a tool execution."""

    output: str | None = None
    error: str | None = None
    error_code: int = 0
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolParameter:
    """Describes one argument of a tool."""

    name: str
    type: str | list[str]
    description: str
    enum: list[str] | None = None
    items: dict[str, Any] | None = None
    required: bool = True


class Tool(ABC):
    """Base class for all tools."""

    @property
    def name(self) -> str:
        return self.get_name()

    @property
    def description(self) -> str:
        return self.get_description()

    @property
    def parameters(self) -> list[ToolParameter]:
        return self.get_parameters()

    @abstractmethod
    def get_name(self) -> str:
        pass

    @abstractmethod
    def get_description(self) -> str:
        pass

    @abstractmethod
    def get_parameters(self) -> list[ToolParameter]:
        pass

    @abstractmethod
    async def execute(self, arguments: ToolCallArguments) -> ToolExecResult:
        pass

    def json_definition(self) -> dict[str, Any]:
        """Returns the JSON schema definition of the tool."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.get_input_schema(),
        }

    def get_input_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {
            "type": "object",
        }

        properties: dict[str, dict[str, ParamSchemaValue]] = {}
        required: list[str] = []

        for param in self.parameters:
            param_schema: dict[str, ParamSchemaValue] = {
                "type": param.type,
                "description": param.description,
            }
            if param.enum:
                param_schema["enum"] = param.enum
            if param.items:
                param_schema["items"] = param.items
            properties[param.name] = param_schema
            if param.required:
                required.append(param.name)

        schema["properties"] = properties
        if required:
            schema["required"] = required
        return schema
