"""Path resolver answering layout queries for per-language emitters.

A PathResolver owns the declaration tree and the protocol path assignment of
one generation run. Its lifecycle is strict:

    resolver = PathResolver()
    resolver.initialize(declarations)   # build + plan, exactly once
    resolver.absolute_path(100, CodeLanguage.TYPESCRIPT)
    resolver.get_relative_path(100, 101)
    resolver.clear()                    # teardown, exactly once

Queries outside initialize()/clear() raise UninitializedStateError.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from protolayout.declarations import (
    DeclarationRegistry,
    MessageDeclaration,
    NamingOracle,
)
from protolayout.exceptions import AlreadyInitializedError, UninitializedStateError
from protolayout.languages import CodeLanguage, get_capability
from protolayout.layout.planner import FoldingPlanner, LayoutPlan
from protolayout.layout.tree import DeclarationTree
from protolayout.utils import (
    PERIOD,
    SLASH,
    capitalize,
    join_segments,
    split_segments,
    to_directory_path,
)

logger = logging.getLogger(__name__)

CURRENT_DIRECTORY = '.'
PARENT_DIRECTORY = '../'


class PathResolver:
    """Owns the protocol path assignment of one generation run.

    Args:
        naming: Optional naming oracle supplying simple names. When omitted,
            the declarations passed to initialize() are used.
        planner: Optional planner, mostly useful for testing.
    """

    def __init__(
        self,
        naming: NamingOracle | None = None,
        planner: FoldingPlanner | None = None,
    ):
        self._naming = naming
        self.planner = planner or FoldingPlanner()
        self.tree: DeclarationTree | None = None
        self.registry: DeclarationRegistry | None = None
        self._plan: LayoutPlan | None = None

    @property
    def is_initialized(self) -> bool:
        return self._plan is not None

    def initialize(
        self, declarations: Iterable[MessageDeclaration], fold: bool = True
    ) -> None:
        """Build the declaration tree and plan the protocol paths.

        Args:
            declarations: The declarations of this generation run.
            fold: Whether protocols are folded into directories at all. When
                False every protocol is generated at the root level and all
                protocols reference each other as living in the same file.

        Raises:
            AlreadyInitializedError: If called again without clear().
            DuplicateDeclarationError: If two declarations share a protocol
                id or a declaration name.
        """
        if self._plan is not None:
            raise AlreadyInitializedError()

        registry = DeclarationRegistry(declarations)
        tree = DeclarationTree.from_declarations(registry)

        if fold and not tree.is_empty():
            plan = self.planner.plan(tree)
        else:
            plan = LayoutPlan()
            logger.debug(
                f'Protocol folding skipped for {len(registry)} declarations (fold={fold})'
            )

        self.registry = registry
        self.tree = tree
        self._plan = plan

    def clear(self) -> None:
        """Release all planning state.

        Raises:
            UninitializedStateError: If nothing is initialized.
        """
        self._require_plan('clear')
        self._plan = None
        self.tree = None
        self.registry = None

    @property
    def assigned_paths(self) -> Mapping[int, str]:
        """Read-only view of the dotted path assigned to each protocol id."""
        return MappingProxyType(self._require_plan('assigned_paths').paths)

    def _require_plan(self, operation: str) -> LayoutPlan:
        if self._plan is None:
            raise UninitializedStateError(operation)
        return self._plan

    def _dotted_path(self, protocol_id: int, operation: str) -> str:
        return self._require_plan(operation).paths.get(protocol_id, '')

    def _simple_name(self, protocol_id: int) -> str:
        naming = self._naming if self._naming is not None else self.registry
        return naming.simple_name(protocol_id)

    def get_protocol_path(self, protocol_id: int) -> str:
        """Get the directory a protocol is generated in, slash-separated.

        Returns '' for root-level protocols and for ids without assignment.

        Raises:
            UninitializedStateError: If the resolver is not initialized.
        """
        return to_directory_path(self._dotted_path(protocol_id, 'get_protocol_path'))

    def get_capitalized_path(self, protocol_id: int) -> str:
        """Get the protocol directory with every segment capitalized.

        Used by languages whose namespaces mirror directories with
        capitalized identifiers.
        """
        path = self._dotted_path(protocol_id, 'get_capitalized_path')
        return join_segments(
            (capitalize(segment) for segment in split_segments(path)), SLASH
        )

    def get_fold_group(self, protocol_id: int) -> str:
        """Get the name of the namespace a protocol was folded at ('' if none)."""
        return self._require_plan('get_fold_group').groups.get(protocol_id, '')

    def file_groups(self) -> dict[str, list[int]]:
        """Group protocol ids by the namespace they were folded at."""
        groups: dict[str, list[int]] = {}
        plan = self._require_plan('file_groups')
        for protocol_id in sorted(plan.groups):
            groups.setdefault(plan.groups[protocol_id], []).append(protocol_id)
        return groups

    def absolute_path(
        self, protocol_id: int, language: CodeLanguage | str
    ) -> str:
        """Get the path code for a protocol is generated at in a language.

        For directory-style languages this is the protocol directory plus the
        simple name, e.g. 'login/LoginRequest'. Package-style languages get
        the containing package in import form instead, e.g. 'login.auth', or
        '.' for root-level protocols.

        Raises:
            UninitializedStateError: If the resolver is not initialized.
            UnresolvableLanguageError: If the language is not recognized.
        """
        path = self.get_protocol_path(protocol_id)
        capability = get_capability(language)
        name = self._simple_name(protocol_id)
        absolute = f'{path}{SLASH}{name}' if path else name

        if capability.internal or not capability.strips_last_segment:
            return absolute

        if not path:
            return capability.empty_path_marker
        package, _, _ = absolute.rpartition(SLASH)
        return package.replace(SLASH, capability.path_separator)

    def get_relative_path(self, protocol_id: int, relative_protocol_id: int) -> str:
        """Get how the file of one protocol references the file of another.

        Returns:
            '' when protocols are not folded (everything lives in one file),
            '.' when both share a directory, './sub/dir' when the target is
            below the source, and '../other' style paths climbing to the
            nearest common ancestor otherwise.

        Raises:
            UninitializedStateError: If the resolver is not initialized.
        """
        plan = self._require_plan('get_relative_path')
        if not plan.paths:
            return ''

        source = split_segments(plan.paths.get(protocol_id, ''))
        target = split_segments(plan.paths.get(relative_protocol_id, ''))

        if target[: len(source)] == source:
            remainder = target[len(source) :]
            if not remainder:
                return CURRENT_DIRECTORY
            return f'{CURRENT_DIRECTORY}{SLASH}{join_segments(remainder, SLASH)}'

        climbs = []
        for depth in range(len(source) - 1, 0, -1):
            climbs.append(PARENT_DIRECTORY)
            if target[:depth] == source[:depth]:
                return ''.join(climbs) + join_segments(target[depth:], SLASH)

        # no common ancestor below the layout root
        logger.debug(
            f"Protocols {protocol_id} and {relative_protocol_id} share no directory: "
            f"'{join_segments(source, PERIOD)}' -> '{join_segments(target, PERIOD)}'"
        )
        return PARENT_DIRECTORY * len(source) + join_segments(target, SLASH)


def plan_layout(
    declarations: Iterable[MessageDeclaration],
    fold: bool = True,
    naming: NamingOracle | None = None,
) -> PathResolver:
    """Convenience function returning an initialized PathResolver."""
    resolver = PathResolver(naming=naming)
    resolver.initialize(declarations, fold=fold)
    return resolver
