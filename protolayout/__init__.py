"""protolayout - Plan the file layout of generated protocol code.

protolayout is the layout planner of a cross-language protocol compiler. It
takes the declared message types of a protocol (protocol id plus
fully-qualified declaration name), folds them into file groups following
their namespaces, and tells each language emitter where to write a message
and how generated files reference each other.

Quick Start:
    >>> from protolayout import CodeLanguage, MessageDeclaration, plan_layout
    >>>
    >>> resolver = plan_layout([
    ...     MessageDeclaration(protocol_id=1, declaration_name='game.login.LoginRequest'),
    ...     MessageDeclaration(protocol_id=2, declaration_name='game.login.LoginResponse'),
    ... ])
    >>> resolver.absolute_path(1, CodeLanguage.TYPESCRIPT)
    'login/LoginRequest'
    >>> resolver.clear()

CLI Usage:
    $ protolayout plan protocols.yaml -l TypeScript
    $ protolayout relative 100 101 protocols.yaml
    $ protolayout languages
"""

from protolayout.config import LayoutConfig, get_config
from protolayout.declarations import (
    DeclarationRegistry,
    MessageDeclaration,
    NamingOracle,
    load_declarations,
)
from protolayout.exceptions import (
    AlreadyInitializedError,
    ConfigurationError,
    DeclarationError,
    DeclarationLoadError,
    DuplicateDeclarationError,
    LayoutStateError,
    ProtoLayoutError,
    UninitializedStateError,
    UnknownProtocolError,
    UnresolvableLanguageError,
)
from protolayout.languages import CodeLanguage, LanguageCapability, resolve_language
from protolayout.layout import (
    DeclarationTree,
    FoldingPlanner,
    LayoutPlan,
    PathResolver,
    TreeNode,
    plan_layout,
)

__all__ = [
    # Layout planning
    'DeclarationTree',
    'TreeNode',
    'FoldingPlanner',
    'LayoutPlan',
    'PathResolver',
    'plan_layout',
    # Declarations and languages
    'MessageDeclaration',
    'DeclarationRegistry',
    'NamingOracle',
    'load_declarations',
    'CodeLanguage',
    'LanguageCapability',
    'resolve_language',
    # Configuration
    'LayoutConfig',
    'get_config',
    # Exceptions
    'ProtoLayoutError',
    'LayoutStateError',
    'UninitializedStateError',
    'AlreadyInitializedError',
    'DeclarationError',
    'DuplicateDeclarationError',
    'UnknownProtocolError',
    'DeclarationLoadError',
    'UnresolvableLanguageError',
    'ConfigurationError',
]

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version('protolayout')
except PackageNotFoundError:
    __version__ = 'unknown'
