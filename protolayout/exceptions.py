"""Custom exceptions for protolayout.

This module defines the hierarchy of exceptions raised while building the
declaration tree, planning the file layout and answering path queries. None
of these conditions is retried: each one means the input is malformed or the
planner is being misused, and the generation run has to stop.
"""


class ProtoLayoutError(Exception):
    """Base exception for all protolayout errors.

    Example:
        try:
            resolver.initialize(declarations)
        except ProtoLayoutError as e:
            print(f"protolayout error: {e}")
    """

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class LayoutStateError(ProtoLayoutError):
    """Base exception for misuse of the resolver lifecycle."""

    pass


class UninitializedStateError(LayoutStateError):
    """A path query was issued before initialization or after teardown.

    Attributes:
        operation: Name of the operation that was attempted.
    """

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            f"Cannot call '{operation}': the protocol path layout is not initialized "
            f'(initialize() was never called or clear() already released it)'
        )


class AlreadyInitializedError(LayoutStateError):
    """initialize() was called twice without an intervening clear()."""

    def __init__(self):
        super().__init__(
            'The protocol path layout is already initialized; call clear() before '
            'initializing it again'
        )


class DeclarationError(ProtoLayoutError):
    """Base exception for problems with message declarations."""

    pass


class DuplicateDeclarationError(DeclarationError):
    """Two declarations resolve to the same tree position or protocol id.

    Attributes:
        declaration_name: The declaration name that was declared twice.
        protocol_id: The protocol id of the rejected declaration.
        existing_id: The protocol id already occupying that position, if known.
    """

    def __init__(
        self,
        declaration_name: str,
        protocol_id: int | None = None,
        existing_id: int | None = None,
    ):
        self.declaration_name = declaration_name
        self.protocol_id = protocol_id
        self.existing_id = existing_id
        message = f"Duplicate declaration '{declaration_name}'"
        if protocol_id is not None and existing_id is not None:
            message += f' (protocol {protocol_id} collides with protocol {existing_id})'
        elif protocol_id is not None:
            message += f' (protocol {protocol_id})'
        super().__init__(message)


class UnknownProtocolError(DeclarationError, KeyError):
    """A protocol id was looked up that no declaration registered.

    Attributes:
        protocol_id: The unknown protocol id.
    """

    def __init__(self, protocol_id: int):
        self.protocol_id = protocol_id
        super().__init__(f'Unknown protocol id {protocol_id}')

    def __str__(self) -> str:
        return self.message


class DeclarationLoadError(DeclarationError):
    """Failed to load message declarations from a file.

    Attributes:
        source: The path that failed to load.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, source: str, cause: Exception | None = None):
        self.source = source
        self.cause = cause
        message = f"Failed to load declarations from '{source}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)


class UnresolvableLanguageError(ProtoLayoutError, ValueError):
    """A target language outside the recognized set was requested.

    Attributes:
        language: The offending language identifier.
    """

    def __init__(self, language: object):
        self.language = language
        super().__init__(f"Unresolvable target language '{language}'")


class ConfigurationError(ProtoLayoutError):
    """Error in configuration.

    Attributes:
        config_path: The path to the configuration file, if applicable.
        field: The specific configuration field that is invalid.
    """

    def __init__(
        self, message: str, config_path: str | None = None, field: str | None = None
    ):
        self.config_path = config_path
        self.field = field
        full_message = message
        if config_path:
            full_message = f"{message} in '{config_path}'"
        if field:
            full_message += f' (field: {field})'
        super().__init__(full_message)
