"""Message declarations and the naming oracle.

The registration subsystem of the protocol compiler hands over one
MessageDeclaration per message type. DeclarationRegistry indexes them by
protocol id and answers the two naming questions the layout planner needs:
the fully-qualified declaration name and the simple name of a protocol.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Protocol, runtime_checkable

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from upath import UPath

from protolayout.exceptions import (
    DeclarationLoadError,
    DuplicateDeclarationError,
    UnknownProtocolError,
)
from protolayout.utils import PERIOD, split_segments

logger = logging.getLogger(__name__)

__all__ = [
    'DeclarationRegistry',
    'MessageDeclaration',
    'NamingOracle',
    'load_declarations',
]


class MessageDeclaration(BaseModel):
    """A declared message type."""

    model_config = {'frozen': True}

    protocol_id: int = Field(
        ..., ge=0, le=65535, description='Protocol id, unique across a generation run.'
    )

    declaration_name: str = Field(
        ...,
        min_length=1,
        description='Fully-qualified, dot-separated declaration name, e.g. "com.game.login.LoginRequest".',
    )

    simple_name: str | None = Field(
        None,
        description='Simple type name; defaults to the last segment of the declaration name.',
    )

    @field_validator('declaration_name')
    @classmethod
    def _check_segments(cls, value: str) -> str:
        if any(not segment.strip() for segment in value.split(PERIOD)):
            raise ValueError(f"declaration name '{value}' contains an empty segment")
        return value

    @property
    def name(self) -> str:
        """The simple name of the declared type."""
        return self.simple_name or split_segments(self.declaration_name)[-1]


@runtime_checkable
class NamingOracle(Protocol):
    """Naming lookups supplied by the registration subsystem."""

    def declaration_name(self, protocol_id: int) -> str: ...

    def simple_name(self, protocol_id: int) -> str: ...


class DeclarationRegistry:
    """Index of message declarations by protocol id.

    Implements NamingOracle. Iteration yields declarations in ascending
    protocol id order.

    Example:
        >>> registry = DeclarationRegistry([
        ...     MessageDeclaration(protocol_id=1, declaration_name='pkg.Foo'),
        ... ])
        >>> registry.simple_name(1)
        'Foo'
    """

    def __init__(self, declarations: Iterable[MessageDeclaration] = ()):
        self._declarations: dict[int, MessageDeclaration] = {}
        for declaration in declarations:
            self.add(declaration)

    def add(self, declaration: MessageDeclaration) -> None:
        """Register a declaration.

        Raises:
            DuplicateDeclarationError: If the protocol id is already registered.
        """
        existing = self._declarations.get(declaration.protocol_id)
        if existing is not None:
            raise DuplicateDeclarationError(
                declaration.declaration_name,
                protocol_id=declaration.protocol_id,
                existing_id=existing.protocol_id,
            )
        self._declarations[declaration.protocol_id] = declaration

    def get(self, protocol_id: int) -> MessageDeclaration:
        try:
            return self._declarations[protocol_id]
        except KeyError:
            raise UnknownProtocolError(protocol_id) from None

    def declaration_name(self, protocol_id: int) -> str:
        return self.get(protocol_id).declaration_name

    def simple_name(self, protocol_id: int) -> str:
        return self.get(protocol_id).name

    def __contains__(self, protocol_id: object) -> bool:
        return protocol_id in self._declarations

    def __iter__(self) -> Iterator[MessageDeclaration]:
        for protocol_id in sorted(self._declarations):
            yield self._declarations[protocol_id]

    def __len__(self) -> int:
        return len(self._declarations)


def _read_document(path: Path | UPath) -> object:
    text = path.read_text(encoding='utf-8')
    if path.suffix.lower() == '.json':
        return json.loads(text)
    return yaml.safe_load(text)


def load_declarations(path: str | Path | UPath) -> list[MessageDeclaration]:
    """Load message declarations from a YAML or JSON file.

    The document is either a list of declarations or a mapping with a
    ``declarations`` key holding that list:

        declarations:
          - protocol_id: 100
            declaration_name: com.game.login.LoginRequest

    Args:
        path: Local path or any URL understood by universal_pathlib.

    Returns:
        The validated declarations, in file order.

    Raises:
        DeclarationLoadError: If the file cannot be read or is malformed.
    """
    source = UPath(path)
    try:
        document = _read_document(source)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise DeclarationLoadError(str(path), e) from e

    if isinstance(document, dict):
        document = document.get('declarations')
    if not isinstance(document, list):
        raise DeclarationLoadError(
            str(path), ValueError('expected a list of declarations')
        )

    try:
        declarations = [MessageDeclaration.model_validate(item) for item in document]
    except ValidationError as e:
        raise DeclarationLoadError(str(path), e) from e

    logger.debug(f'Loaded {len(declarations)} declarations from {path}')
    return declarations
