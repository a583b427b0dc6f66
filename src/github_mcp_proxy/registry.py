"""Function registry.

Immutable catalog of the functions the proxy exposes. Each definition carries
its description, its parameter specs and the handler that implements it, so a
definition and its handler can never drift apart.
"""

import logging
from collections.abc import Awaitable, Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from .config.defaults import DEFAULT_BRANCH, DEFAULT_PAGE, DEFAULT_PER_PAGE
from .tools.contents import get_file_contents
from .tools.search import search_code, search_repositories
from .utils.errors import RegistryError
from .utils.types import FunctionName, FunctionResult

logger = logging.getLogger(__name__)

Handler = Callable[[Mapping[str, Any]], Awaitable[FunctionResult]]


@dataclass(frozen=True)
class ParameterSpec:
    """
    One declared parameter of a function.

    Attributes:
        name: Parameter name as sent by callers
        type: JSON-schema primitive type ("string", "integer")
        description: Human-readable description
        required: Whether callers must supply it
        default: Value used by the handler when omitted
    """

    name: str
    type: str
    description: str
    required: bool = False
    default: Any = None

    def to_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self.type, "description": self.description}
        if self.default is not None:
            schema["default"] = self.default
        return schema


@dataclass(frozen=True)
class FunctionDefinition:
    """
    A named, schema-described function and its handler.

    Attributes:
        name: Unique function name
        description: Human-readable description
        parameters: Ordered parameter specs
        handler: Coroutine function taking the raw parameter mapping
    """

    name: str
    description: str
    parameters: tuple[ParameterSpec, ...]
    handler: Handler = field(compare=False, repr=False)

    @property
    def required(self) -> list[str]:
        return [p.name for p in self.parameters if p.required]

    def parameters_schema(self) -> dict[str, Any]:
        """Render the parameters as a JSON-schema object."""
        return {
            "type": "object",
            "properties": {p.name: p.to_schema() for p in self.parameters},
            "required": self.required,
        }

    def to_dict(self) -> dict[str, Any]:
        """Discovery representation: {name, description, parameters}."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters_schema(),
        }


class Registry:
    """Ordered, read-only collection of function definitions."""

    def __init__(self, definitions: tuple[FunctionDefinition, ...] | list[FunctionDefinition]):
        definitions = tuple(definitions)
        by_name: dict[str, FunctionDefinition] = {}
        for definition in definitions:
            if definition.name in by_name:
                raise RegistryError(f"Function '{definition.name}' is registered twice")
            if not callable(definition.handler):
                raise RegistryError(f"Function '{definition.name}' has no handler")
            by_name[definition.name] = definition
        self._definitions = definitions
        self._by_name: Mapping[str, FunctionDefinition] = by_name

    def names(self) -> list[str]:
        return [d.name for d in self._definitions]

    def get(self, name: object) -> FunctionDefinition | None:
        if not isinstance(name, str):
            return None
        return self._by_name.get(name)

    def resolve(self, name: object) -> Handler | None:
        """Return the handler registered under ``name``, or None."""
        definition = self.get(name)
        return definition.handler if definition is not None else None

    def describe(self) -> list[dict[str, Any]]:
        """Discovery listing in registration order."""
        return [d.to_dict() for d in self._definitions]

    def __contains__(self, name: object) -> bool:
        return self.get(name) is not None

    def __iter__(self) -> Iterator[FunctionDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def list(self) -> tuple[FunctionDefinition, ...]:
        return self._definitions


def _search_parameters(query_description: str) -> tuple[ParameterSpec, ...]:
    return (
        ParameterSpec("q", "string", query_description, required=True),
        ParameterSpec("page", "integer", "Page number of the results to fetch", default=DEFAULT_PAGE),
        ParameterSpec(
            "per_page", "integer", "Number of results per page (max 100)", default=DEFAULT_PER_PAGE
        ),
    )


def build_default_registry() -> Registry:
    """Build the registry of all functions exposed by the proxy.

    Raises:
        RegistryError: If a FunctionName has no definition
    """
    registry = Registry(
        (
            FunctionDefinition(
                name=FunctionName.SEARCH_CODE.value,
                description="Search for code across GitHub repositories",
                parameters=_search_parameters(
                    "Search query, GitHub code search syntax (e.g. 'useState repo:facebook/react')"
                ),
                handler=search_code,
            ),
            FunctionDefinition(
                name=FunctionName.GET_FILE_CONTENTS.value,
                description="Get the contents of a file from a GitHub repository",
                parameters=(
                    ParameterSpec("owner", "string", "Repository owner (user or organization)", required=True),
                    ParameterSpec("repo", "string", "Repository name", required=True),
                    ParameterSpec("path", "string", "Path to the file within the repository", required=True),
                    ParameterSpec("branch", "string", "Branch, tag or commit to read from", default=DEFAULT_BRANCH),
                ),
                handler=get_file_contents,
            ),
            FunctionDefinition(
                name=FunctionName.SEARCH_REPOSITORIES.value,
                description="Search for GitHub repositories",
                parameters=_search_parameters(
                    "Search query, GitHub repository search syntax (e.g. 'tetris language:python')"
                ),
                handler=search_repositories,
            ),
        )
    )

    missing = [n.value for n in FunctionName if n.value not in registry]
    if missing:
        raise RegistryError(f"No definition registered for: {', '.join(missing)}")

    logger.debug(f"Registry built: {', '.join(registry.names())}")
    return registry
