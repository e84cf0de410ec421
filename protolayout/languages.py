"""Target languages and their path conventions.

Every language the protocol compiler can emit is listed in CodeLanguage and
has one LanguageCapability entry describing how an absolute protocol path is
post-processed for it. Supporting a new target means adding an enum member
and a table entry; a language without an entry is rejected rather than
silently treated like another one.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from protolayout.exceptions import UnresolvableLanguageError
from protolayout.utils import PERIOD, SLASH


class CodeLanguage(str, Enum):
    """Languages the protocol compiler generates code for."""

    CPP = 'Cpp'
    GO = 'Go'
    JAVASCRIPT = 'JavaScript'
    TYPESCRIPT = 'TypeScript'
    CSHARP = 'CSharp'
    PROTOBUF = 'Protobuf'
    LUA = 'Lua'
    GDSCRIPT = 'GdScript'
    PYTHON = 'Python'
    ENHANCE = 'Enhance'


@dataclass(frozen=True)
class LanguageCapability:
    """Path conventions of one target language.

    Attributes:
        path_separator: Separator used in the post-processed absolute path.
        strips_last_segment: Whether the filename component is dropped, so
            the result addresses the containing package instead of the file.
        empty_path_marker: Value returned for root-level protocols when the
            last segment is stripped (the "current package" marker).
        internal: Marks the native format the compiler uses for itself; it is
            not subject to cross-language path rules.
    """

    path_separator: str = SLASH
    strips_last_segment: bool = False
    empty_path_marker: str = ''
    internal: bool = False

    @property
    def is_package_style(self) -> bool:
        return self.strips_last_segment


DIRECTORY_STYLE = LanguageCapability()
PACKAGE_STYLE = LanguageCapability(
    path_separator=PERIOD, strips_last_segment=True, empty_path_marker=PERIOD
)

LANGUAGE_CAPABILITIES: MappingProxyType[CodeLanguage, LanguageCapability] = (
    MappingProxyType(
        {
            CodeLanguage.CPP: DIRECTORY_STYLE,
            CodeLanguage.GO: DIRECTORY_STYLE,
            CodeLanguage.JAVASCRIPT: DIRECTORY_STYLE,
            CodeLanguage.TYPESCRIPT: DIRECTORY_STYLE,
            CodeLanguage.CSHARP: DIRECTORY_STYLE,
            CodeLanguage.PROTOBUF: DIRECTORY_STYLE,
            CodeLanguage.LUA: DIRECTORY_STYLE,
            CodeLanguage.GDSCRIPT: DIRECTORY_STYLE,
            CodeLanguage.PYTHON: PACKAGE_STYLE,
            CodeLanguage.ENHANCE: LanguageCapability(internal=True),
        }
    )
)


def resolve_language(language: CodeLanguage | str) -> CodeLanguage:
    """Resolve a language identifier to a CodeLanguage member.

    Accepts enum members, enum values ('TypeScript') and member names
    ('TYPESCRIPT'), compared case-insensitively.

    Raises:
        UnresolvableLanguageError: If the identifier names no known language.
    """
    if isinstance(language, CodeLanguage):
        return language

    if isinstance(language, str):
        key = language.strip().lower()
        for member in CodeLanguage:
            if key in (member.value.lower(), member.name.lower()):
                return member

    raise UnresolvableLanguageError(language)


def get_capability(language: CodeLanguage | str) -> LanguageCapability:
    """Look up the path conventions for a language.

    Raises:
        UnresolvableLanguageError: If the language is unknown or has no
            capability entry.
    """
    member = resolve_language(language)
    try:
        return LANGUAGE_CAPABILITIES[member]
    except KeyError:
        raise UnresolvableLanguageError(language) from None
